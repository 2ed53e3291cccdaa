from __future__ import annotations
import asyncio
import posixpath
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional, Set
from urllib.parse import urlsplit
import aiofiles
import httpx
from .classify import url_extension
from .config import Settings
from .errors import FetchFailure
from .models import FetchResult
from .utils import get_logger

logger = get_logger("media")


def image_name_from_url(url: str) -> str:
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise FetchFailure(url, "malformed URL") from e
    if not parts.scheme or not parts.netloc:
        raise FetchFailure(url, "malformed URL")
    return posixpath.splitext(posixpath.basename(parts.path))[0]


def format_timestamp(now: datetime) -> str:
    # ISO-время без пунктуации: 20261018T091502123456Z
    return now.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")


def build_filename(url: str, now: datetime, strip_query: bool = False) -> str:
    return f"{image_name_from_url(url)}{url_extension(url, strip_query)}_{format_timestamp(now)}"


class FilenameAllocator:
    """Hands out names unique within one run and absent from the directory."""

    def __init__(self, directory: Path, strip_query: bool = False) -> None:
        self.directory = directory
        self.strip_query = strip_query
        self._used: Set[str] = set()

    def allocate(self, url: str, now: Optional[datetime] = None) -> Path:
        now = now or datetime.now(timezone.utc)
        name = build_filename(url, now, self.strip_query)
        while name in self._used or (self.directory / name).exists():
            now += timedelta(microseconds=1)
            name = build_filename(url, now, self.strip_query)
        self._used.add(name)
        return self.directory / name


async def _stream_to_file(client: httpx.AsyncClient, url: str, destination: Path) -> None:
    async with client.stream("GET", url) as resp:
        resp.raise_for_status()
        async with aiofiles.open(destination, "wb") as f:
            async for chunk in resp.aiter_bytes():
                await f.write(chunk)


async def _fetch_one(
    client: httpx.AsyncClient,
    url: str,
    allocator: FilenameAllocator,
    timeout: float,
) -> bool:
    destination: Optional[Path] = None
    try:
        destination = allocator.allocate(url)
        await asyncio.wait_for(_stream_to_file(client, url, destination), timeout=timeout)
    except Exception as e:
        logger.warning("Failed to download image %s: %s", url, str(e) or type(e).__name__)
        if destination is not None:
            destination.unlink(missing_ok=True)
        return False
    logger.debug("Saved %s -> %s", url, destination)
    return True


async def _run_batches(
    client: httpx.AsyncClient,
    urls: List[str],
    settings: Settings,
    allocator: FilenameAllocator,
) -> FetchResult:
    result = FetchResult()
    failed_seen: Set[str] = set()
    batch_size = max(1, settings.max_image_batch)
    for start in range(0, len(urls), batch_size):
        batch = urls[start : start + batch_size]
        logger.info("Batch %s: downloading %s images", start // batch_size + 1, len(batch))
        outcomes = await asyncio.gather(
            *(_fetch_one(client, url, allocator, settings.requests_timeout) for url in batch)
        )
        for url, ok in zip(batch, outcomes):
            if ok:
                result.successful.append(url)
            elif url not in failed_seen:
                failed_seen.add(url)
                result.failed.append(url)
    return result


async def download_images(
    urls: List[str],
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> FetchResult:
    download_dir = Path(settings.download_dir)
    download_dir.mkdir(parents=True, exist_ok=True)
    allocator = FilenameAllocator(download_dir, strip_query=settings.strip_url_query)
    if client is not None:
        return await _run_batches(client, urls, settings, allocator)
    timeout = httpx.Timeout(settings.requests_timeout)
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
        return await _run_batches(own_client, urls, settings, allocator)
