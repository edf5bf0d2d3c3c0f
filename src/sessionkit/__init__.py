"""Cookie-bound request session management for FastAPI applications."""

__version__ = "0.1.0"
