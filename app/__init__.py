"""Signal timing compute service."""

__version__ = "0.1.0"
