"""Tests for interrupt-time temp file cleanup."""

import signal
import subprocess
import sys
import textwrap

import pytest
from pathlib import Path

from modsquad.converter.interrupt import InterruptGuard


class ExitCalled(Exception):
    pass


def make_guard() -> tuple[InterruptGuard, list[int]]:
    codes: list[int] = []

    def fake_exit(code: int):
        codes.append(code)
        raise ExitCalled()

    return InterruptGuard(exit_func=fake_exit), codes


class TestInterruptGuard:
    """Tests for the single-slot registry and its handler."""

    def test_register_and_clear(self, tmp_path):
        guard, _ = make_guard()
        assert guard.current is None

        guard.register(tmp_path / "a.wav")
        assert guard.current == tmp_path / "a.wav"

        guard.clear()
        assert guard.current is None

    def test_handler_removes_registered_file(self, tmp_path):
        guard, codes = make_guard()
        temp = tmp_path / "modsquad-1.wav"
        temp.write_bytes(b"RIFF")
        guard.register(temp)

        with pytest.raises(ExitCalled):
            guard.handle_signal(signal.SIGTERM)

        assert not temp.exists()
        assert codes == [1]

    def test_handler_without_registration_exits(self):
        guard, codes = make_guard()
        with pytest.raises(ExitCalled):
            guard.handle_signal(signal.SIGINT)
        assert codes == [1]

    def test_handler_ignores_missing_file(self, tmp_path):
        """The file may already be gone; exit must still happen."""
        guard, codes = make_guard()
        guard.register(tmp_path / "gone.wav")

        with pytest.raises(ExitCalled):
            guard.handle_signal(signal.SIGTERM)
        assert codes == [1]

    def test_handler_can_run_while_lock_is_held(self, tmp_path):
        """Signal handlers run on the main thread that may hold the lock."""
        guard, codes = make_guard()
        temp = tmp_path / "t.wav"
        temp.write_bytes(b"")
        guard.register(temp)

        with guard._lock:
            with pytest.raises(ExitCalled):
                guard.handle_signal(signal.SIGINT)
        assert not temp.exists()


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals only")
class TestSignalDelivery:
    """End-to-end signal handling in a child interpreter."""

    def test_sigterm_removes_artifact_and_exits_non_zero(self, tmp_path):
        temp = tmp_path / "modsquad-inflight.wav"
        script = textwrap.dedent("""
            import os, signal, sys, time
            from pathlib import Path
            from modsquad.converter.interrupt import InterruptGuard

            guard = InterruptGuard()
            guard.install()
            path = Path(sys.argv[1])
            path.write_bytes(b"RIFF")
            guard.register(path)
            os.kill(os.getpid(), signal.SIGTERM)
            time.sleep(10)
            sys.exit(0)
        """)
        repo_root = Path(__file__).resolve().parents[1]

        result = subprocess.run(
            [sys.executable, "-c", script, str(temp)],
            cwd=repo_root,
            capture_output=True,
            timeout=30,
        )

        assert result.returncode == 1
        assert not temp.exists()
