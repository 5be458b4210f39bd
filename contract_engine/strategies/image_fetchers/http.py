"""HTTP image fetcher used for the agency logo.

Single attempt with a short timeout; the caller degrades to an inline
error marker on failure.
"""

import logging

import httpx

from contract_engine.interfaces.image_fetcher import BaseImageFetcher, FetchedImage
from contract_engine.interfaces.resolution import ImageFetchError

logger = logging.getLogger(__name__)


class HttpImageFetcher(BaseImageFetcher):
    """Downloads images with httpx."""

    def __init__(
        self,
        timeout: float = 5.0,
        max_bytes: int = 5 * 1024 * 1024,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds.
            max_bytes: Largest accepted image.
            client: Optional shared client (tests inject a mock transport).
        """
        self._timeout = timeout
        self._max_bytes = max_bytes
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self._client

    async def fetch(self, url: str) -> FetchedImage:
        if not url.startswith(("http://", "https://")):
            raise ImageFetchError(f"Unsupported image URL: {url}")

        logger.debug(f"Fetching image: {url}")
        try:
            response = await self._get_client().get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ImageFetchError(
                f"Image request returned HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ImageFetchError(f"Image request failed: {e}") from e

        content = response.content
        if not content:
            raise ImageFetchError("Image response was empty")
        if len(content) > self._max_bytes:
            raise ImageFetchError(f"Image too large: {len(content)} bytes")

        content_type = response.headers.get("content-type", "application/octet-stream")
        content_type = content_type.split(";")[0].strip()
        if not content_type.startswith("image/"):
            logger.warning(f"Unexpected content type for image {url}: {content_type}")

        logger.info(f"Fetched image ({len(content)} bytes) from {url}")
        return FetchedImage(content=content, content_type=content_type, url=url)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
