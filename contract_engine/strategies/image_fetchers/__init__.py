"""Concrete image fetcher implementations."""

from contract_engine.strategies.image_fetchers.http import HttpImageFetcher

__all__ = [
    "HttpImageFetcher",
]
