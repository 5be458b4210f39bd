"""Clause and placeholder resolution service for lease contracts."""

__version__ = "0.1.0"
