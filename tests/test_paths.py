"""Tests for output path resolution."""

import pytest
from pathlib import Path

from modsquad.converter.paths import resolve_output_path
from modsquad.models.plan import TargetFormat


class TestResolveOutputPath:
    """Tests for resolve_output_path."""

    def test_single_file_lands_in_output_root(self):
        """A plain file input maps to <out>/<stem>.<format>."""
        path = resolve_output_path(Path("song.mod"), Path("out"), TargetFormat.MP3)
        assert path == Path("out/song.mp3")

    def test_preserves_subdirectories(self):
        """Recursive relative paths keep their directory layout."""
        path = resolve_output_path(
            Path("songs/sub/b.xm"), Path("out"), TargetFormat.FLAC
        )
        assert path == Path("out/songs/sub/b.flac")

    @pytest.mark.parametrize("fmt", list(TargetFormat))
    def test_extension_matches_format(self, fmt):
        """The output extension is always the target format."""
        path = resolve_output_path(Path("tune.it"), Path("out"), fmt)
        assert path.suffix == f".{fmt.value}"

    def test_input_without_extension(self):
        """Inputs without an extension just gain the format extension."""
        path = resolve_output_path(Path("README"), Path("out"), TargetFormat.WAV)
        assert path == Path("out/README.wav")

    def test_multiple_dots_strip_only_last_extension(self):
        """Only the last extension is replaced."""
        path = resolve_output_path(
            Path("artist.title.s3m"), Path("out"), TargetFormat.MP3
        )
        assert path == Path("out/artist.title.mp3")

    def test_deterministic(self):
        """Same inputs always give the same path."""
        args = (Path("songs/a.mod"), Path("/tmp/out"), TargetFormat.FLAC)
        assert resolve_output_path(*args) == resolve_output_path(*args)

    def test_does_not_touch_filesystem(self, tmp_path):
        """Resolving never creates directories."""
        out = tmp_path / "missing"
        resolve_output_path(Path("deep/a.mod"), out, TargetFormat.WAV)
        assert not out.exists()
