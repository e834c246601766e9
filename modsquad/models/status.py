"""Status enums and error codes."""

from enum import Enum


class JobStatus(str, Enum):
    """Outcome of a single conversion job."""

    CONVERTED = "CONVERTED"
    SKIPPED = "SKIPPED"  # Output already present
    FAILED = "FAILED"


class ErrorCode(str, Enum):
    """Machine-readable job error codes."""

    OUTPUT_EXISTS = "OUTPUT_EXISTS"
    MKDIR_FAIL = "MKDIR_FAIL"
    TEMP_FAIL = "TEMP_FAIL"
    DECODE_FAIL = "DECODE_FAIL"
    ENCODE_FAIL = "ENCODE_FAIL"
    MOVE_FAIL = "MOVE_FAIL"
    INTERNAL_ERROR = "INTERNAL_ERROR"
