"""Exchange mailbox usage and quota reporting."""

__version__ = "0.1.0"
