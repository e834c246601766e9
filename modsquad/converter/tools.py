"""External tool commands and invocation."""

import logging
import shutil
import subprocess
from pathlib import Path

from modsquad.models.config import Config
from modsquad.models.plan import TargetFormat

logger = logging.getLogger(__name__)


def build_decode_command(
    input_path: Path,
    wav_output: Path,
    decoder_path: str = "xmp",
) -> list[str]:
    """Render a module to a WAV file."""
    return [decoder_path, "-o", str(wav_output), str(input_path)]


def build_flac_command(
    wav_input: Path,
    output_path: Path,
    flac_path: str = "flac",
) -> list[str]:
    """Losslessly compress a decoded WAV file."""
    return [flac_path, "-o", str(output_path), str(wav_input)]


def build_mp3_command(
    wav_input: Path,
    output_path: Path,
    lame_path: str = "lame",
    vbr_quality: int = 6,
) -> list[str]:
    """
    Encode a decoded WAV file to VBR MP3.

    lame is run without --silent so its progress reaches the terminal.
    """
    return [
        lame_path,
        "--vbr-new",
        "-V", str(vbr_quality),
        str(wav_input),
        str(output_path),
    ]


def required_tools(target_format: TargetFormat, config: Config | None = None) -> list[str]:
    """Tools that must be on PATH to produce the given format."""
    config = config or Config()
    tools = [config.decoder_path]
    if target_format == TargetFormat.FLAC:
        tools.append(config.flac_path)
    elif target_format == TargetFormat.MP3:
        tools.append(config.lame_path)
    return tools


def find_missing_tools(target_format: TargetFormat, config: Config | None = None) -> list[str]:
    """Return the required tools that cannot be resolved on PATH."""
    return [
        tool for tool in required_tools(target_format, config)
        if shutil.which(tool) is None
    ]


def run_tool(cmd: list[str]) -> bool:
    """
    Run an external tool to completion.

    The child inherits our stdout/stderr so its progress is shown live.
    There is no timeout: a hung tool blocks the batch.

    Returns:
        True if the tool exited with status 0
    """
    logger.debug("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, check=False)
    except OSError as e:
        logger.error("Could not start %s: %s", cmd[0], e)
        return False

    if result.returncode != 0:
        logger.debug("%s exited with status %d", cmd[0], result.returncode)
        return False
    return True
