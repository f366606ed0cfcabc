"""Syslog collection over UDP and NATS, with SQLite storage and an HTTP API."""

__version__ = "0.1.0"
__all__ = ["__version__"]