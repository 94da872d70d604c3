"""Stateless double-submit cookie CSRF protection with a FastAPI host."""

__version__ = "1.0.0"
