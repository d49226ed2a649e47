"""Replay a recorded YAML event log through the subtitles plugin."""

from pathlib import Path

import yaml

from stepsubs import event
from stepsubs.config import PluginConfig
from stepsubs.event import EventDispatcher, Step, Test
from stepsubs.plugin import SubtitlesPlugin


class ScriptedClock:
    """Clock whose reading is set from each log entry's ``at`` field."""

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now


def load_event_log(path: Path) -> list[dict]:
    """Load and validate the ``events`` list of an event log file."""
    if not path.exists():
        raise FileNotFoundError(f"Event log not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Malformed event log {path}: {e}") from e
    entries = data.get("events") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ValueError(f"Event log {path} must contain an 'events' list")

    validate_events(entries)
    return entries


def validate_events(entries: list[dict]) -> None:
    """Check every entry before anything is dispatched."""
    previous_at = 0
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"Event #{i + 1} must be a mapping")
        if entry.get("event") not in event.EVENT_NAMES:
            raise ValueError(f"Event #{i + 1} has unknown event '{entry.get('event')}'")
        at = entry.get("at")
        if not isinstance(at, int) or isinstance(at, bool) or at < 0:
            raise ValueError(f"Event #{i + 1} needs a non-negative integer 'at' (ms)")
        if at < previous_at:
            raise ValueError(f"Event #{i + 1} 'at' goes backwards ({at} < {previous_at})")
        previous_at = at
        if entry["event"] in (event.STEP_STARTED, event.STEP_FINISHED) and not entry.get("key"):
            raise ValueError(f"Event #{i + 1} ({entry['event']}) needs a 'key'")
        if not isinstance(entry.get("args") or [], list):
            raise ValueError(f"Event #{i + 1} 'args' must be a list")
        if not isinstance(entry.get("artifacts") or {}, dict):
            raise ValueError(f"Event #{i + 1} 'artifacts' must be a mapping")


def replay_events(
    entries: list[dict], config: PluginConfig, base_dir: Path | None = None
) -> list[Test]:
    """Dispatch logged events in order. Returns the tests that finished.

    Relative video paths are resolved against ``base_dir``.
    """
    validate_events(entries)
    clock = ScriptedClock()
    dispatcher = EventDispatcher()
    SubtitlesPlugin(config, clock=clock).attach(dispatcher)

    current: Test | None = None
    steps: dict[str, Step] = {}
    finished: list[Test] = []

    for entry in entries:
        clock.now = entry["at"]
        name = entry["event"]
        if name == event.TEST_BEFORE:
            current = Test(title=str(entry.get("title", "")))
            steps = {}
            dispatcher.emit(name, current)
        elif name == event.STEP_STARTED:
            step = Step(
                actor=str(entry.get("actor", "I")),
                name=str(entry.get("name", "")),
                args=tuple(entry.get("args") or ()),
                key=str(entry["key"]),
            )
            steps[step.key] = step
            dispatcher.emit(name, step)
        elif name == event.STEP_FINISHED:
            key = str(entry["key"])
            dispatcher.emit(name, steps.get(key, Step(actor="", name="", key=key)))
        else:
            test = current or Test(title=str(entry.get("title", "")))
            for artifact, value in (entry.get("artifacts") or {}).items():
                test.artifacts[artifact] = _resolve(str(value), base_dir)
            dispatcher.emit(name, test)
            finished.append(test)
            current = None
    return finished


def _resolve(value: str, base_dir: Path | None) -> str:
    path = Path(value)
    if base_dir is None or path.is_absolute():
        return value
    return str(base_dir / path)
