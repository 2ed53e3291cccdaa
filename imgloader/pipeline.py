from __future__ import annotations
import asyncio
from typing import List, Optional
import httpx
from .classify import check_unique_limit, classify_urls
from .config import Settings, get_settings
from .errors import ImageLoaderError, InternalError
from .media import download_images
from .models import FetchResult, Report, UploadedFile, UploadSummary
from .table import extract_image_urls, parse_rows, validate_upload
from .utils import get_logger

logger = get_logger("pipeline")

INTERNAL_ERROR_MESSAGE = "Internal server error"


def failure_message(url: str) -> str:
    return f"Failed to download image: {url}"


def build_report(result: FetchResult, rejected: List[str]) -> Report:
    # Сначала ошибки загрузки, затем отклонённые по расширению
    errors = [failure_message(u) for u in result.failed]
    errors.extend(failure_message(u) for u in rejected)
    return Report(
        success=True,
        message=f"Processed {len(result.successful)} images successfully",
        errors=errors,
    )


def inspect_upload(upload: UploadedFile, settings: Settings) -> UploadSummary:
    validate_upload(upload, settings)
    rows = parse_rows(upload.path, settings)
    urls = extract_image_urls(rows, settings)
    unique = check_unique_limit(urls, settings)
    fetchable, rejected = classify_urls(urls, settings)
    return UploadSummary(
        rows=len(rows),
        references=len(urls),
        unique=unique,
        fetchable=fetchable,
        rejected=rejected,
    )


def error_report(exc: ImageLoaderError) -> Report:
    message = INTERNAL_ERROR_MESSAGE if isinstance(exc, InternalError) else str(exc)
    return Report(success=False, message=message, status_code=exc.status_code)


async def run_pipeline(
    upload: Optional[UploadedFile],
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Report:
    settings = settings or get_settings()
    if upload is None:
        return Report(success=False, message="No file uploaded", status_code=400)
    try:
        summary = inspect_upload(upload, settings)
        logger.info(
            "%s rows, %s image URLs (%s unique): %s to download, %s rejected",
            summary.rows,
            summary.references,
            summary.unique,
            len(summary.fetchable),
            len(summary.rejected),
        )
        result = await download_images(summary.fetchable, settings, client=client)
    except InternalError:
        logger.exception("Internal error while processing %s", upload.path)
        return error_report(InternalError(INTERNAL_ERROR_MESSAGE))
    except ImageLoaderError as e:
        logger.warning("Upload rejected: %s", e)
        return error_report(e)
    except Exception:
        logger.exception("Unexpected error while processing %s", upload.path)
        return error_report(InternalError(INTERNAL_ERROR_MESSAGE))
    return build_report(result, summary.rejected)


def process_upload(
    upload: Optional[UploadedFile],
    settings: Optional[Settings] = None,
) -> Report:
    return asyncio.run(run_pipeline(upload, settings))
