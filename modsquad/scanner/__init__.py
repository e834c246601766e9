"""Input discovery."""

from modsquad.scanner.walker import iter_jobs, walk_directory

__all__ = ["iter_jobs", "walk_directory"]
