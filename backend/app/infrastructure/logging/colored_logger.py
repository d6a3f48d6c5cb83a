"""Colored pipeline logger — ANSI-colored console output for media uploads.

Every line is prefixed with the pipeline stage it belongs to, so a single
upload can be followed from receipt to storage (or cleanup) in the
terminal.

Color scheme:
    🟢 Green   — Upload / Storage
    🟣 Magenta — Image transform
    🟡 Yellow  — Cleanup of staged blobs
    🔴 Red     — Errors
"""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, NamedTuple

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
MAGENTA = "\033[95m"
GRAY = "\033[90m"


class Stage(NamedTuple):
    label: str
    color: str
    icon: str


class PipelineStage:
    """Stages an upload passes through."""

    UPLOAD = Stage("UPLOAD", GREEN, "📁")
    TRANSFORM = Stage("TRANSFORM", MAGENTA, "🖼️")
    STORAGE = Stage("STORAGE", GREEN, "💾")
    CLEANUP = Stage("CLEANUP", YELLOW, "🧹")


class PipelineLogger:
    """Color-coded logger for the media pipeline.

    Usage:
        plog = PipelineLogger("MediaPipeline")
        plog.step_start(PipelineStage.UPLOAD, "Received banner.png", size_bytes=5120)
        plog.step_complete(PipelineStage.STORAGE, "Stored banner.png", key="carousel/abc.jpg")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    @staticmethod
    def _context(kwargs: dict[str, Any], color: str = GRAY) -> str:
        if not kwargs:
            return ""
        pairs = " | ".join(f"{k}={v}" for k, v in kwargs.items())
        return f" {color}({pairs}){RESET}"

    def step_start(self, stage: Stage, message: str, **kwargs: Any) -> None:
        self._logger.info(
            f"{stage.color}{BOLD}{stage.icon} [{stage.label}]{RESET} "
            f"{stage.color}{message}{RESET}{self._context(kwargs)}"
        )

    def step_complete(self, stage: Stage, message: str, **kwargs: Any) -> None:
        self._logger.info(
            f"{stage.color}{stage.icon} [{stage.label}]{RESET} "
            f"{GREEN}✓ {message}{RESET}{self._context(kwargs)}"
        )

    def step_error(self, stage: Stage, message: str, error: BaseException | None = None) -> None:
        """Log a failed step in red, with the exception type and text if given."""
        line = f"{RED}{BOLD}❌ [{stage.label}]{RESET} {RED}{message}{RESET}"
        if error is not None:
            line += f" {DIM}→ {type(error).__name__}: {error}{RESET}"
        self._logger.error(line)

    def detail(self, message: str, **kwargs: Any) -> None:
        self._logger.info(f"   {GRAY}├─ {message}{RESET}{self._context(kwargs, DIM)}")

    @contextmanager
    def timed_step(self, stage: Stage, message: str, **kwargs: Any) -> Iterator[None]:
        """Log start and end of a step together with its duration.

        Cancellation and timeouts are reported as failures too, then re-raised.
        """
        self.step_start(stage, message, **kwargs)
        started = time.perf_counter()
        try:
            yield
        except BaseException as exc:
            self.step_error(stage, f"{message} failed after {time.perf_counter() - started:.2f}s", error=exc)
            raise
        self.step_complete(stage, f"{message} ({time.perf_counter() - started:.2f}s)")
