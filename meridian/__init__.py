"""Meridian: S&OP tracking backend."""

__version__ = "0.1.0"
