"""Soft assertions: record expectation failures and keep the scenario running.

Each check produces an AssertionOutcome. The pytest report hook in conftest.py
fails the test at the end of the call phase when any outcome failed, so a
scenario runs every step but still ends red.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator

from e2e_logging import get_logger

LOGGER = get_logger("soft")


class SoftAssertionError(AssertionError):
    """Raised by SoftAssertions.assert_all when collected checks failed."""


@dataclass(frozen=True)
class AssertionOutcome:
    description: str
    step: str | None
    passed: bool
    message: str | None = None

    def render(self) -> str:
        where = f"[{self.step}] " if self.step else ""
        first_line = (self.message or "").strip().splitlines()
        detail = f": {first_line[0]}" if first_line else ""
        return f"{where}{self.description}{detail}"


class SoftAssertions:
    """Collects pass/fail outcomes instead of raising on the first failure."""

    def __init__(self, step_source: Callable[[], str | None] | None = None) -> None:
        self._step_source = step_source or (lambda: None)
        self.outcomes: list[AssertionOutcome] = []

    @contextmanager
    def check(self, description: str) -> Iterator[None]:
        """Run the block as one soft check; an AssertionError is recorded, not raised."""
        step = self._step_source()
        try:
            yield
        except AssertionError as exc:
            outcome = AssertionOutcome(description, step, passed=False, message=str(exc))
            self.outcomes.append(outcome)
            LOGGER.warning(
                "soft_assertion_failed",
                extra={"event": "soft_assertion_failed", "check": description, "step": step},
            )
        else:
            self.outcomes.append(AssertionOutcome(description, step, passed=True))

    @property
    def failures(self) -> list[AssertionOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.passed]

    @property
    def passed(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        failures = self.failures
        lines = [f"{len(failures)} of {len(self.outcomes)} soft assertion(s) failed:"]
        lines.extend(f"  - {outcome.render()}" for outcome in failures)
        return "\n".join(lines)

    def assert_all(self) -> None:
        if self.failures:
            raise SoftAssertionError(self.summary())
