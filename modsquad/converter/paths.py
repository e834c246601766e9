"""Output path resolution."""

from pathlib import Path

from modsquad.models.plan import TargetFormat

TEMP_PREFIX = "modsquad-"
TEMP_SUFFIX = ".wav"


def resolve_output_path(
    relative_output_path: Path,
    output_root: Path,
    target_format: TargetFormat,
) -> Path:
    """
    Compute the final output path for a job.

    The last extension of the relative path is replaced by the target
    format, so ``songs/sub/b.xm`` under ``out`` as flac becomes
    ``out/songs/sub/b.flac``. Pure: never touches the filesystem.
    """
    return output_root / relative_output_path.with_suffix(f".{target_format.value}")
