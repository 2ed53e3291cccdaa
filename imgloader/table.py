from __future__ import annotations
import csv
from pathlib import Path
from typing import Dict, List, TextIO, Union
from .config import Settings
from .errors import InternalError, MissingColumns, ParseError, RowCountExceeded, ValidationError
from .models import UploadedFile
from .utils import get_logger

logger = get_logger("table")

Record = Dict[str, str]


def validate_upload(upload: UploadedFile, settings: Settings) -> None:
    # Проверяем только заявленные метаданные, содержимое не читаем
    if not upload.content_type or upload.content_type != settings.expected_content_type:
        raise ValidationError("Only CSV files are allowed")
    if upload.size > settings.max_file_size:
        limit_mb = settings.max_file_size / (1024 * 1024)
        raise ValidationError(f"File size exceeds the {limit_mb:g}MB limit")


def _read_rows(f: TextIO) -> List[Record]:
    try:
        return list(csv.DictReader(f))
    except (csv.Error, UnicodeDecodeError) as e:
        raise ParseError(f"Malformed CSV: {e}") from e


def parse_rows(source: Union[str, Path, TextIO], settings: Settings) -> List[Record]:
    if isinstance(source, (str, Path)):
        try:
            with Path(source).open("r", encoding="utf-8-sig", newline="") as f:
                rows = _read_rows(f)
        except OSError as e:
            # файл загрузки должен существовать — это не ошибка клиента
            raise InternalError(f"Cannot read upload {source}: {e}") from e
    else:
        rows = _read_rows(source)

    if len(rows) > settings.max_row_count:
        raise RowCountExceeded(f"CSV contains more than the allowed {settings.max_row_count} rows.")

    # Колонки сверяем по первой строке; пустой файл = нет ни одной колонки
    columns = set(rows[0].keys()) if rows else set()
    if not all(col in columns for col in settings.required_columns):
        raise MissingColumns("Invalid CSV format. Missing required columns.")
    logger.info("CSV parsed: %s rows", len(rows))
    return rows


def extract_image_urls(rows: List[Record], settings: Settings) -> List[str]:
    urls: List[str] = []
    for row in rows:
        for col in settings.image_columns:
            value = row.get(col)
            if value:
                urls.append(value)
    return urls
