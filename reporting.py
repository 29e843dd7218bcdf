"""Step narration and named attachments for one running scenario.

Attachments are held in memory while the test runs; the `reporter` fixture
writes them under the test's artifact directory when the attachments policy
keeps them, and the report hook links them into pytest-html.
"""

from __future__ import annotations

import re
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from playwright.sync_api import Page

from e2e_logging import get_logger

LOGGER = get_logger("steps")

_EXTENSIONS = {"image/png": "png", "text/plain": "txt"}


@dataclass(frozen=True)
class Attachment:
    name: str
    content_type: str
    body: bytes
    step: str | None = None

    @property
    def extension(self) -> str:
        return _EXTENSIONS.get(self.content_type, "bin")


@dataclass
class StepRecord:
    name: str
    status: str = "running"
    duration_ms: int | None = None
    error: str | None = None


def _slug(name: str) -> str:
    return re.sub(r"[^\w-]+", "-", name.lower()).strip("-") or "attachment"


@dataclass
class ScenarioReporter:
    """Narrates steps and keeps screenshots/text captured along the way."""

    nodeid: str
    page: Page | None = None
    steps: list[StepRecord] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)
    _active: list[str] = field(default_factory=list)

    @property
    def current_step(self) -> str | None:
        return self._active[-1] if self._active else None

    @property
    def failed_step(self) -> StepRecord | None:
        return next((step for step in self.steps if step.status == "failed"), None)

    @contextmanager
    def step(self, name: str) -> Iterator[StepRecord]:
        """Run a named step; a raised error marks the step failed and propagates."""
        record = StepRecord(name=name)
        self.steps.append(record)
        self._active.append(name)
        started = time.perf_counter()
        LOGGER.info(
            "step_start",
            extra={"event": "step_start", "test_nodeid": self.nodeid, "step": name},
        )
        try:
            yield record
        except BaseException as exc:
            record.status = "failed"
            record.error = f"{type(exc).__name__}: {exc}"
            raise
        else:
            record.status = "passed"
        finally:
            self._active.pop()
            record.duration_ms = int((time.perf_counter() - started) * 1000)
            event = "step_failed" if record.status == "failed" else "step_end"
            log = LOGGER.error if record.status == "failed" else LOGGER.info
            log(
                event,
                extra={
                    "event": event,
                    "test_nodeid": self.nodeid,
                    "step": name,
                    "duration_ms": record.duration_ms,
                },
            )

    def attach_text(self, name: str, value: object) -> None:
        self.attachments.append(
            Attachment(name, "text/plain", str(value).encode("utf-8"), self.current_step)
        )

    def attach_screenshot(self, name: str) -> None:
        if self.page is None:
            raise RuntimeError("attach_screenshot requires a page")
        body = self.page.screenshot(full_page=True)
        self.attachments.append(Attachment(name, "image/png", body, self.current_step))

    def write_attachments(self, target_dir: Path) -> list[tuple[Attachment, Path]]:
        """Write attachments as NN-name.ext files and return (attachment, path) pairs."""
        if not self.attachments:
            return []
        target_dir.mkdir(parents=True, exist_ok=True)
        written = []
        for index, attachment in enumerate(self.attachments, start=1):
            path = target_dir / f"{index:02d}-{_slug(attachment.name)}.{attachment.extension}"
            path.write_bytes(attachment.body)
            written.append((attachment, path))
        return written

    def steps_section(self) -> str:
        lines = []
        for record in self.steps:
            duration = f" ({record.duration_ms} ms)" if record.duration_ms is not None else ""
            lines.append(f"{record.status.upper():<7} {record.name}{duration}")
            if record.error:
                lines.append(f"        {record.error.splitlines()[0]}")
        return "\n".join(lines)
