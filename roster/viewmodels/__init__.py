"""View models projecting use-case outcomes into screen state (no I/O here)."""
