"""Strix: user accounts and licitations over a JWT-secured REST API."""

__version__ = "1.0.0"
