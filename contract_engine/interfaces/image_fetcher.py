"""Abstract base class for image fetchers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class FetchedImage:
    """Downloaded image bytes.

    Attributes:
        content: Raw image bytes.
        content_type: MIME type reported by the server.
        url: The URL the image was fetched from.
    """

    content: bytes
    content_type: str
    url: str


class BaseImageFetcher(ABC):
    """Abstract base class for image download strategies.

    Used to retrieve the real-estate agency logo before it is embedded
    into a generated contract.
    """

    @abstractmethod
    async def fetch(self, url: str) -> FetchedImage:
        """Download an image.

        Args:
            url: Absolute URL of the image.

        Returns:
            The downloaded image.

        Raises:
            ImageFetchError: If the download fails for any reason.
        """
        ...

    async def aclose(self) -> None:
        """Release any resources held by the fetcher."""
        return None
