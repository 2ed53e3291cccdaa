from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional, Tuple
from dotenv import load_dotenv

load_dotenv()

REQUIRED_COLUMNS: Tuple[str, ...] = ("sku", "Image 1", "Image 2", "Image 3", "Image 4", "Image 5")
VALID_IMAGE_EXTENSIONS: FrozenSet[str] = frozenset({".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff"})


@dataclass
class Settings:
    max_file_size: int = 10 * 1024 * 1024
    max_row_count: int = 1000
    max_image_batch: int = 50
    max_unique_images: int = 5000
    download_dir: Path = Path("downloads")
    requests_timeout: float = 30.0
    # Отрезать ?query и #fragment перед определением расширения
    strip_url_query: bool = False
    expected_content_type: str = "text/csv"
    required_columns: Tuple[str, ...] = REQUIRED_COLUMNS
    allowed_extensions: FrozenSet[str] = field(default_factory=lambda: VALID_IMAGE_EXTENSIONS)

    @property
    def image_columns(self) -> Tuple[str, ...]:
        # первая обязательная колонка — идентификатор (sku)
        return self.required_columns[1:]


def str_to_bool(val: Optional[str], default: bool) -> bool:
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "y"}


def get_settings() -> Settings:
    return Settings(
        max_file_size=int(os.getenv("MAX_FILE_SIZE", str(10 * 1024 * 1024))),
        max_row_count=int(os.getenv("MAX_ROW_COUNT", "1000")),
        max_image_batch=int(os.getenv("MAX_IMAGE_BATCH", "50")),
        max_unique_images=int(os.getenv("MAX_UNIQUE_IMAGES", "5000")),
        download_dir=Path(os.getenv("DOWNLOAD_DIR", "downloads")),
        requests_timeout=float(os.getenv("REQUESTS_TIMEOUT", "30")),
        strip_url_query=str_to_bool(os.getenv("STRIP_URL_QUERY"), False),
    )


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO")
