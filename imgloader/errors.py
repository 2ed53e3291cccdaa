from __future__ import annotations


class ImageLoaderError(Exception):
    # HTTP-статус, который отдаёт граница пайплайна
    status_code: int = 400


class ValidationError(ImageLoaderError):
    """Declared content type or size rejected before reading the file."""


class ParseError(ImageLoaderError):
    """The CSV could not be decoded or tokenized."""


class RowCountExceeded(ImageLoaderError):
    pass


class MissingColumns(ImageLoaderError):
    pass


class TooManyUniqueReferences(ImageLoaderError):
    pass


class FetchFailure(ImageLoaderError):
    def __init__(self, url: str, reason: str = "") -> None:
        super().__init__(f"{url}: {reason}" if reason else url)
        self.url = url
        self.reason = reason


class InternalError(ImageLoaderError):
    status_code = 500
