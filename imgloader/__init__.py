from .config import Settings, get_settings
from .models import FetchResult, Report, UploadedFile, UploadSummary
from .pipeline import process_upload, run_pipeline

__all__ = [
    "FetchResult",
    "Report",
    "Settings",
    "UploadSummary",
    "UploadedFile",
    "get_settings",
    "process_upload",
    "run_pipeline",
]
