"""Users client data layer: remote-first repository with a local cache."""

__version__ = "0.1.0"
