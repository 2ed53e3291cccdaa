from __future__ import annotations
import mimetypes
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field


class UploadedFile(BaseModel):
    content_type: str
    size: int
    path: Path

    @classmethod
    def from_path(cls, path: Path, content_type: Optional[str] = None) -> "UploadedFile":
        path = Path(path)
        if content_type is None:
            content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(content_type=content_type, size=path.stat().st_size, path=path)


class FetchResult(BaseModel):
    successful: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)


class Report(BaseModel):
    success: bool
    message: str
    errors: Optional[List[str]] = None
    status_code: int = 200

    def to_payload(self) -> dict:
        return self.model_dump(exclude={"status_code"}, exclude_none=True)


class UploadSummary(BaseModel):
    rows: int
    references: int
    unique: int
    fetchable: List[str] = Field(default_factory=list)
    rejected: List[str] = Field(default_factory=list)
