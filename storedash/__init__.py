"""storedash: administration client for an e-commerce backend API."""

__version__ = "0.1.0"
