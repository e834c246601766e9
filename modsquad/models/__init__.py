"""Data models for modsquad."""

from modsquad.models.config import Config, ConvertConfig
from modsquad.models.plan import ConversionJob, JobResult, TargetFormat
from modsquad.models.status import ErrorCode, JobStatus

__all__ = [
    "Config",
    "ConvertConfig",
    "ConversionJob",
    "JobResult",
    "TargetFormat",
    "ErrorCode",
    "JobStatus",
]
