"""Packaged data files (hidden placeholder list)."""
