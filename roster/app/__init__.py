"""Application composition: configuration and explicit service wiring."""

from .settings import ClientConfig
from .wiring import UserServices, build_services

__all__ = ["ClientConfig", "UserServices", "build_services"]
