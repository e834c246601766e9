"""Sequential conversion pipeline."""

import logging
import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable

from modsquad.converter.interrupt import InterruptGuard, interrupt_guard
from modsquad.converter.paths import TEMP_PREFIX, TEMP_SUFFIX, resolve_output_path
from modsquad.converter.tools import (
    build_decode_command,
    build_flac_command,
    build_mp3_command,
    run_tool,
)
from modsquad.models.config import Config, ConvertConfig
from modsquad.models.plan import ConversionJob, JobResult, TargetFormat
from modsquad.models.status import ErrorCode, JobStatus
from modsquad.utils.logging import job_context

logger = logging.getLogger(__name__)


@dataclass
class PipelineEvent:
    """Base event for pipeline progress."""

    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class JobStartedEvent(PipelineEvent):
    """Event when a job starts processing."""

    job: ConversionJob | None = None


@dataclass
class JobCompletedEvent(PipelineEvent):
    """Event when a job produced its output."""

    job: ConversionJob | None = None
    result: JobResult | None = None


@dataclass
class JobSkippedEvent(PipelineEvent):
    """Event when a job's output already exists."""

    job: ConversionJob | None = None
    result: JobResult | None = None


@dataclass
class JobErrorEvent(PipelineEvent):
    """Event when a job fails."""

    job: ConversionJob | None = None
    error: str = ""


@dataclass
class PipelineStats:
    """Statistics for pipeline execution."""

    total_jobs: int = 0
    converted_jobs: int = 0
    skipped_jobs: int = 0
    failed_jobs: int = 0
    started_at: datetime | None = None
    completed_at: datetime | None = None


class ConversionPipeline:
    """
    Sequential module conversion pipeline.

    Handles:
    - Skipping jobs whose output already exists
    - Decoding each module to a temp WAV and encoding it to the target format
    - Temp file cleanup on every exit path of a job
    - Progress events and per-run statistics

    A failing job is logged and recorded; it never stops the batch.
    """

    def __init__(
        self,
        config: ConvertConfig,
        global_config: Config | None = None,
        guard: InterruptGuard | None = None,
        runner: Callable[[list[str]], bool] | None = None,
        event_callback: Callable[[PipelineEvent], None] | None = None,
    ):
        self.config = config
        self.global_config = global_config or Config()
        self.guard = guard or interrupt_guard
        self.runner = runner or run_tool
        self.event_callback = event_callback
        self.stats = PipelineStats()

    def emit(self, event: PipelineEvent) -> None:
        """Emit event to callback if registered."""
        if self.event_callback:
            self.event_callback(event)

    def run(self, jobs: Iterable[ConversionJob]) -> list[JobResult]:
        """
        Process jobs one after another.

        Args:
            jobs: Jobs to process, typically a lazy walker

        Returns:
            List of JobResult in processing order
        """
        self.stats = PipelineStats(started_at=datetime.now())
        results = []

        for job in jobs:
            self.stats.total_jobs += 1
            self.emit(JobStartedEvent(job=job))
            result = self.process(job)

            if result.status == JobStatus.CONVERTED:
                self.stats.converted_jobs += 1
                self.emit(JobCompletedEvent(job=job, result=result))
            elif result.status == JobStatus.SKIPPED:
                self.stats.skipped_jobs += 1
                self.emit(JobSkippedEvent(job=job, result=result))
            else:
                self.stats.failed_jobs += 1
                self.emit(JobErrorEvent(job=job, error=result.error_message or ""))

            results.append(result)

        self.stats.completed_at = datetime.now()
        return results

    def process(self, job: ConversionJob) -> JobResult:
        """Convert a single job. Never raises."""
        started_at = datetime.now()
        try:
            result = self._process(job)
        except Exception as e:
            logger.exception("Unexpected error processing %s", job.input_path)
            result = _failed(job, ErrorCode.INTERNAL_ERROR, str(e))
        result.started_at = started_at
        result.completed_at = datetime.now()
        return result

    def _process(self, job: ConversionJob) -> JobResult:
        output_path = resolve_output_path(
            job.relative_output_path,
            self.config.output_root,
            self.config.target_format,
        )

        if _output_exists(output_path):
            logger.info(
                "Skipping %s: output already exists at %s", job.input_path, output_path,
                extra=job_context(job.input_path, "check", output_path=output_path),
            )
            return JobResult(
                input_path=job.input_path,
                output_path=output_path,
                status=JobStatus.SKIPPED,
                error_code=ErrorCode.OUTPUT_EXISTS,
            )

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(
                "Failed to create dir for %s: %s", output_path, e,
                extra=job_context(job.input_path, "mkdir", error_code=ErrorCode.MKDIR_FAIL.value),
            )
            return _failed(job, ErrorCode.MKDIR_FAIL, str(e))

        try:
            temp_path = self._create_temp_wav()
        except OSError as e:
            logger.error(
                "Failed to create temp wav file for %s: %s", job.input_path, e,
                extra=job_context(job.input_path, "tempfile", error_code=ErrorCode.TEMP_FAIL.value),
            )
            return _failed(job, ErrorCode.TEMP_FAIL, str(e))

        self.guard.register(temp_path)
        try:
            return self._convert(job, temp_path, output_path)
        finally:
            _cleanup(temp_path)
            self.guard.clear()

    def _create_temp_wav(self) -> Path:
        temp_dir = self.global_config.temp_dir
        fd, name = tempfile.mkstemp(
            prefix=TEMP_PREFIX,
            suffix=TEMP_SUFFIX,
            dir=str(temp_dir) if temp_dir else None,
        )
        os.close(fd)
        return Path(name)

    def _convert(self, job: ConversionJob, temp_path: Path, output_path: Path) -> JobResult:
        cfg = self.global_config

        decode_cmd = build_decode_command(job.input_path, temp_path, cfg.decoder_path)
        if not self.runner(decode_cmd):
            logger.error(
                "%s failed for %s", cfg.decoder_path, job.input_path,
                extra=job_context(job.input_path, "decode", error_code=ErrorCode.DECODE_FAIL.value),
            )
            return _failed(job, ErrorCode.DECODE_FAIL, f"{cfg.decoder_path} failed")

        target_format = self.config.target_format
        if target_format == TargetFormat.WAV:
            try:
                os.replace(temp_path, output_path)
            except OSError as e:
                logger.error(
                    "Failed to move wav file for %s: %s", job.input_path, e,
                    extra=job_context(job.input_path, "move", error_code=ErrorCode.MOVE_FAIL.value),
                )
                return _failed(job, ErrorCode.MOVE_FAIL, str(e))
        else:
            if target_format == TargetFormat.FLAC:
                tool = cfg.flac_path
                encode_cmd = build_flac_command(temp_path, output_path, tool)
            else:
                tool = cfg.lame_path
                encode_cmd = build_mp3_command(
                    temp_path, output_path, tool, cfg.mp3_vbr_quality
                )
            if not self.runner(encode_cmd):
                logger.error(
                    "%s failed for %s", tool, job.input_path,
                    extra=job_context(job.input_path, "encode", error_code=ErrorCode.ENCODE_FAIL.value),
                )
                # Output did not exist before this job; drop the partial file
                _cleanup(output_path)
                return _failed(job, ErrorCode.ENCODE_FAIL, f"{tool} failed")

        logger.info(
            "Processed %s -> %s", job.input_path, output_path,
            extra=job_context(job.input_path, "done", output_path=output_path),
        )
        return JobResult(
            input_path=job.input_path,
            output_path=output_path,
            status=JobStatus.CONVERTED,
        )


def _output_exists(path: Path) -> bool:
    """
    Check for an existing output.

    Errors other than "not found" are logged and treated as absent.
    """
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning("Error checking %s: %s", path, e)
        return False
    return True


def _failed(job: ConversionJob, code: ErrorCode, message: str) -> JobResult:
    return JobResult(
        input_path=job.input_path,
        status=JobStatus.FAILED,
        error_code=code,
        error_message=message,
    )


def _cleanup(path: Path) -> None:
    """Remove file if it exists."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.debug("Could not remove %s: %s", path, e)
