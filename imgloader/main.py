from __future__ import annotations
import json
from pathlib import Path
from typing import Optional
import typer
from rich import print as rprint

app = typer.Typer(add_completion=False, help="CLI для загрузки изображений товаров из CSV")


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Уровень логирования: DEBUG, INFO, WARNING (override .env)"
    ),
) -> None:
    from .utils import get_logger, set_log_level
    get_logger()
    if log_level is not None:
        set_log_level(log_level)


def _settings(
    download_dir: Optional[Path] = None,
    batch_size: Optional[int] = None,
    timeout: Optional[float] = None,
    max_unique: Optional[int] = None,
    strip_query: Optional[bool] = None,
):
    from .config import get_settings
    settings = get_settings()
    if download_dir is not None:
        settings.download_dir = download_dir
    if batch_size is not None:
        settings.max_image_batch = batch_size
    if timeout is not None:
        settings.requests_timeout = timeout
    if max_unique is not None:
        settings.max_unique_images = max_unique
    if strip_query is not None:
        settings.strip_url_query = strip_query
    return settings


@app.command("process")
def process(
    file: Path = typer.Option(..., "--file", exists=True, dir_okay=False, help="CSV с колонками sku, Image 1..5"),
    content_type: Optional[str] = typer.Option(None, "--content-type", help="Заявленный MIME-тип (по умолчанию по расширению)"),
    download_dir: Optional[Path] = typer.Option(None, "--download-dir", help="Куда сохранять изображения (override .env)"),
    batch_size: Optional[int] = typer.Option(None, "--batch-size", min=1, help="Размер пачки одновременных загрузок"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Таймаут одного запроса, сек"),
    max_unique: Optional[int] = typer.Option(None, "--max-unique", help="Лимит уникальных URL"),
    strip_query: Optional[bool] = typer.Option(
        None, "--strip-query/--no-strip-query", help="Отбрасывать query/fragment при проверке расширения"
    ),
) -> None:
    from .models import UploadedFile
    from .pipeline import process_upload
    settings = _settings(download_dir, batch_size, timeout, max_unique, strip_query)
    upload = UploadedFile.from_path(file, content_type=content_type)
    report = process_upload(upload, settings)
    rprint(json.dumps(report.to_payload(), ensure_ascii=False, indent=2))
    if report.status_code >= 400:
        raise typer.Exit(code=1)


@app.command("check")
def check(
    file: Path = typer.Option(..., "--file", exists=True, dir_okay=False),
    content_type: Optional[str] = typer.Option(None, "--content-type"),
    strip_query: Optional[bool] = typer.Option(None, "--strip-query/--no-strip-query"),
) -> None:
    from .errors import ImageLoaderError
    from .models import UploadedFile
    from .pipeline import inspect_upload
    settings = _settings(strip_query=strip_query)
    upload = UploadedFile.from_path(file, content_type=content_type)
    try:
        summary = inspect_upload(upload, settings)
    except ImageLoaderError as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(code=1)
    rprint({
        "rows": summary.rows,
        "references": summary.references,
        "unique": summary.unique,
        "fetchable": len(summary.fetchable),
        "rejected": len(summary.rejected),
    })
    for url in summary.rejected:
        rprint(f"[yellow]- {url}[/yellow]")
    rprint("[green]OK[/green] Проверка пройдена")
