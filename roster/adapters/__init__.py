"""Adapter package for the user data layer.

Purpose:
    Concrete implementations of the domain ports: the REST-backed remote
    source, the in-memory local source, the remote-first repository that
    composes them, and an offline remote double for tests and demos.

Dependencies:
    ``requests``/``urllib3`` for transport and failure classification; the
    rest is standard library.

Call context:
    Imported by ``roster.app.wiring`` for runtime composition and by tests.
"""
