"""Per-test accumulation of step timings."""

import logging
import uuid
from dataclasses import dataclass, field

from stepsubs.event import Step
from stepsubs.timestamps import format_timestamp

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100
TRUNCATION_MARKER = "..."


@dataclass
class StepRecord:
    id: str
    title: str
    start: str  # HH:MM:SS#mmm
    started_at: int  # absolute ms, sort key only
    end: str | None = None


def _format_arg(arg: object) -> str:
    """Render one argument the way the runner prints it: None as empty, bools lowercase."""
    if arg is None:
        return ""
    if isinstance(arg, bool):
        return "true" if arg else "false"
    return str(arg)


def step_title(step: Step) -> str:
    """Build the cue label ``actor.name(arg1,arg2)``, capped at 100 chars."""
    args = ",".join(_format_arg(arg) for arg in step.args) if step.args else ""
    title = f"{step.actor}.{step.name}({args})"
    if len(title) > MAX_TITLE_LENGTH:
        title = f"{title[:MAX_TITLE_LENGTH]}{TRUNCATION_MARKER}"
    return title


@dataclass
class Session:
    """Step state for the test currently running.

    Everything is replaced on ``reset``; nothing carries over between tests.
    """

    started_at: int | None = None
    steps: dict[str, StepRecord] = field(default_factory=dict)
    correlation: dict[str, str] = field(default_factory=dict)

    def reset(self, now: int) -> None:
        self.started_at = now
        self.steps = {}
        self.correlation = {}

    def record_start(self, step: Step, now: int) -> StepRecord:
        if self.started_at is None:
            logger.warning("Step '%s' started before any test; using it as the time base", step.name)
            self.started_at = now
        step_id = uuid.uuid4().hex
        record = StepRecord(
            id=step_id,
            title=step_title(step),
            start=format_timestamp(now - self.started_at),
            started_at=now,
        )
        self.steps[step_id] = record
        self.correlation[step.key] = step_id
        return record

    def record_finish(self, step: Step | None, now: int) -> StepRecord | None:
        """Set the end offset of a started step. Unknown steps are ignored."""
        key = getattr(step, "key", None)
        if not key:
            return None
        record = self.steps.get(self.correlation.get(key, ""))
        if record is None:
            logger.debug("No started step for key %s; ignoring finish", key)
            return None
        record.end = format_timestamp(now - self.started_at)
        return record

    def finished_steps(self) -> list[StepRecord]:
        """Finished steps ordered by start instant."""
        ordered = sorted(self.steps.values(), key=lambda r: r.started_at)
        finished = [r for r in ordered if r.end is not None]
        skipped = len(ordered) - len(finished)
        if skipped:
            logger.debug("Skipping %d unfinished step(s)", skipped)
        return finished
