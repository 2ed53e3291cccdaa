from __future__ import annotations
import hashlib
import posixpath
from typing import List, Tuple
from urllib.parse import urlsplit, urlunsplit
from .config import Settings
from .errors import TooManyUniqueReferences


def fingerprint(url: str) -> str:
    return hashlib.sha256(url.encode("utf-8")).hexdigest()


def check_unique_limit(urls: List[str], settings: Settings) -> int:
    unique = {fingerprint(u) for u in urls}
    if len(unique) > settings.max_unique_images:
        raise TooManyUniqueReferences(
            f"CSV contains more than the allowed {settings.max_unique_images} unique image URLs."
        )
    return len(unique)


def _strip_query(url: str) -> str:
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def url_extension(url: str, strip_query: bool = False) -> str:
    # По умолчанию суффикс берётся от всей строки: "img.jpg?x=1.png" даст ".png"
    if strip_query:
        url = _strip_query(url)
    return posixpath.splitext(url)[1]


def is_valid_image_extension(url: str, settings: Settings) -> bool:
    ext = url_extension(url, strip_query=settings.strip_url_query).lower()
    return ext in settings.allowed_extensions


def classify_urls(urls: List[str], settings: Settings) -> Tuple[List[str], List[str]]:
    fetchable: List[str] = []
    rejected: List[str] = []
    for url in urls:
        if is_valid_image_extension(url, settings):
            fetchable.append(url)
        else:
            rejected.append(url)
    return fetchable, rejected
