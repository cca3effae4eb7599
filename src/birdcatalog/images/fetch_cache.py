"""In-memory image fetch cache.

Each distinct URL is downloaded at most once per successful fetch for the
lifetime of the cache. Concurrent requests for a URL that is already being
downloaded wait on that download instead of starting another one. Failures
are reported to every waiter and are not cached, so the next request for the
same URL tries again.
"""

import asyncio
import io
import logging
from dataclasses import dataclass
from typing import Any

import httpx
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageBytes:
    """Downloaded image data that decoded successfully."""

    url: str
    data: bytes
    format: str
    mime: str
    width: int
    height: int

    def __len__(self) -> int:
        """Return the size of the raw data in bytes."""
        return len(self.data)


class ImageFetchError(Exception):
    """An image could not be fetched or decoded."""

    def __init__(self, url: str, message: str):
        self.url = url
        self.message = message
        super().__init__(f"{message} ({url})")


def decode_image(url: str, data: bytes) -> ImageBytes:
    """Validate downloaded bytes as an image.

    Args:
        url: Source URL, carried into the result and errors
        data: Response body

    Returns:
        ImageBytes describing the decoded image

    Raises:
        ImageFetchError: If the data is not a readable image
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format or "UNKNOWN"
            mime = image.get_format_mimetype() or "application/octet-stream"
            width, height = image.size
            image.verify()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as e:
        raise ImageFetchError(url, "unable to make image from data") from e

    return ImageBytes(
        url=url, data=data, format=image_format, mime=mime, width=width, height=height
    )


class ImageFetchCache:
    """Process-lifetime URL to image cache with single-flight downloads.

    The cache is unbounded and never evicts. It owns its HTTP client unless
    one is supplied, in which case closing the client is left to the caller.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        max_concurrent_fetches: int | None = None,
        user_agent: str | None = None,
    ):
        """Initialize the cache.

        Args:
            client: HTTP client to use; a new one is created lazily when None
            timeout: Request timeout in seconds for an owned client
            max_concurrent_fetches: Upper bound on simultaneous downloads (None = unbounded)
            user_agent: User-Agent header for an owned client
        """
        self._client = client
        self._owns_client = client is None
        self.timeout = timeout
        self.user_agent = user_agent
        self.max_concurrent_fetches = max_concurrent_fetches
        self._semaphore = (
            asyncio.Semaphore(max_concurrent_fetches) if max_concurrent_fetches else None
        )

        self._images: dict[str, ImageBytes] = {}
        self._in_flight: dict[str, asyncio.Task[ImageBytes]] = {}
        self._lock = asyncio.Lock()

        self._stats = {
            "hits": 0,
            "misses": 0,
            "coalesced": 0,
            "errors": 0,
        }

    @property
    def client(self) -> httpx.AsyncClient:
        """HTTP client used for downloads."""
        if self._client is None:
            headers = {"User-Agent": self.user_agent} if self.user_agent else None
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers=headers,
                follow_redirects=True,
            )
            logger.debug("Created image HTTP client")
        return self._client

    async def fetch(self, url: str) -> ImageBytes:
        """Return the image at ``url``, downloading it only if not cached.

        Args:
            url: Image URL

        Returns:
            The decoded image

        Raises:
            ImageFetchError: If the download or decoding fails
        """
        async with self._lock:
            cached = self._images.get(url)
            if cached is not None:
                self._stats["hits"] += 1
                return cached

            task = self._in_flight.get(url)
            if task is None:
                self._stats["misses"] += 1
                task = asyncio.create_task(self._download(url))
                self._in_flight[url] = task
            else:
                self._stats["coalesced"] += 1

        # A cancelled caller must not cancel a download other callers share
        return await asyncio.shield(task)

    async def _download(self, url: str) -> ImageBytes:
        """Download, decode and cache one URL."""
        try:
            if self._semaphore is None:
                image = await self._get(url)
            else:
                async with self._semaphore:
                    image = await self._get(url)
        except ImageFetchError as e:
            self._stats["errors"] += 1
            logger.warning("Image fetch failed: %s", e)
            raise
        else:
            self._images[url] = image
            logger.debug("Cached %s (%d bytes)", url, len(image))
            return image
        finally:
            self._in_flight.pop(url, None)

    async def _get(self, url: str) -> ImageBytes:
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ImageFetchError(url, f"HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ImageFetchError(url, f"request failed: {e}") from e

        if not response.content:
            raise ImageFetchError(url, "missing body")
        # Pillow decoding is CPU bound
        return await asyncio.to_thread(decode_image, url, response.content)

    def cached(self, url: str) -> ImageBytes | None:
        """Return the cached image for a URL without fetching."""
        return self._images.get(url)

    def __contains__(self, url: object) -> bool:
        """Check whether a URL is cached."""
        return url in self._images

    def __len__(self) -> int:
        """Return the number of cached images."""
        return len(self._images)

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics including hit rate
        """
        total_requests = self._stats["hits"] + self._stats["misses"] + self._stats["coalesced"]
        hit_rate = self._stats["hits"] / total_requests if total_requests > 0 else 0.0

        return {
            **self._stats,
            "hit_rate": round(hit_rate * 100, 2),
            "total_requests": total_requests,
            "cached": len(self._images),
            "in_flight": len(self._in_flight),
        }

    async def aclose(self) -> None:
        """Close the HTTP client if the cache created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("Closed image HTTP client")

    async def __aenter__(self) -> "ImageFetchCache":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        """Return string representation of ImageFetchCache."""
        stats = self.get_stats()
        return (
            f"<ImageFetchCache cached={stats['cached']} "
            f"hit_rate={stats['hit_rate']}% "
            f"requests={stats['total_requests']}>"
        )
