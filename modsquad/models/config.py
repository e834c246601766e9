"""Configuration models."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from modsquad.models.plan import TargetFormat


class ConvertConfig(BaseModel):
    """Options for a single conversion run."""

    output_root: Path = Path("out")
    target_format: TargetFormat = TargetFormat.MP3
    recursive: bool = False


class Config(BaseSettings):
    """Global configuration from environment or defaults."""

    # External tools
    decoder_path: str = "xmp"
    flac_path: str = "flac"
    lame_path: str = "lame"

    # lame -V level, 0 (best) .. 9 (smallest)
    mp3_vbr_quality: int = Field(default=6, ge=0, le=9)

    # Where temporary WAV files are created (system default if unset)
    temp_dir: Path | None = None

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    jsonl_log: bool = False

    model_config = {"env_prefix": "MODSQUAD_"}

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value
