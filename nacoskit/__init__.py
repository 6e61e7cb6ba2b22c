"""Data models, request parameters, UUIDs, a semaphore and utilities for service-registry and configuration clients."""

__version__ = "0.1.0"
__all__ = ["model", "params", "semaphore", "util", "uuid_generator", "uuids"]