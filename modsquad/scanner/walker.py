"""Input discovery."""

import logging
import os
import stat
from collections.abc import Iterable, Iterator
from pathlib import Path

from modsquad.models.plan import ConversionJob

logger = logging.getLogger(__name__)


def iter_jobs(
    inputs: Iterable[Path | str],
    recursive: bool = False,
) -> Iterator[ConversionJob]:
    """
    Yield a conversion job for every module found in the inputs.

    Plain files map to their base name. Directories are only entered when
    recursive is set; their files keep their layout below a folder named
    after the directory. Unusable inputs are logged and skipped.

    Args:
        inputs: Files and directories, processed in the order given
        recursive: Recurse into directories

    Yields:
        ConversionJob per input file
    """
    for raw in inputs:
        path = Path(raw)
        try:
            mode = os.stat(path).st_mode
        except OSError as e:
            logger.warning("Skipping %s: %s", path, e)
            continue

        if stat.S_ISDIR(mode):
            if not recursive:
                logger.warning("Skipping directory %s (use --recursive)", path)
                continue
            root_name = Path(os.path.basename(os.path.normpath(path)))
            yield from walk_directory(path, root_name)
        elif stat.S_ISREG(mode):
            yield ConversionJob(input_path=path, relative_output_path=Path(path.name))
        else:
            logger.warning("Skipping %s: not a regular file", path)


def walk_directory(directory: Path, relative_root: Path) -> Iterator[ConversionJob]:
    """
    Depth-first walk of a directory in lexical order.

    Entries are visited sorted by name with files and sub-directories
    interleaved. Symlinked directories are not followed. Errors on single
    entries are logged and the walk continues.
    """
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.error("Error reading %s: %s", directory, e)
        return

    for entry in entries:
        entry_path = Path(entry.path)
        relative = relative_root / entry.name
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            logger.error("Error reading %s: %s", entry_path, e)
            continue

        if is_dir:
            yield from walk_directory(entry_path, relative)
        else:
            yield ConversionJob(input_path=entry_path, relative_output_path=relative)
