"""Conversion job and result models."""

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel

from modsquad.models.status import ErrorCode, JobStatus


class TargetFormat(str, Enum):
    """Output audio formats."""

    WAV = "wav"  # Decoded output moved into place as-is
    FLAC = "flac"  # Lossless re-encode
    MP3 = "mp3"  # Lossy VBR re-encode


class ConversionJob(BaseModel):
    """One input module and where its output lands below the output root."""

    input_path: Path
    relative_output_path: Path

    model_config = {"frozen": True}


class JobResult(BaseModel):
    """Result of processing a single job."""

    input_path: Path
    output_path: Path | None = None
    status: JobStatus = JobStatus.FAILED
    error_code: ErrorCode | None = None
    error_message: str | None = None

    # Timing
    started_at: datetime | None = None
    completed_at: datetime | None = None
