"""Capture executed steps as subtitles for tests that record a video.

Attach a ``SubtitlesPlugin`` to an ``EventDispatcher``. When a test ends
with a ``video`` artifact, a subtitle file with one cue per finished step
is written next to the video (SRT by default, WebVTT when the configured
format is ``"WEBVTT"``) and registered as the ``subtitle`` artifact.
"""

import logging
import time
from collections.abc import Callable

from stepsubs import event
from stepsubs.config import PluginConfig
from stepsubs.event import EventDispatcher, Step, Test
from stepsubs.session import Session
from stepsubs.subtitles import write_subtitles

logger = logging.getLogger(__name__)


def monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class SubtitlesPlugin:
    def __init__(
        self,
        config: PluginConfig | None = None,
        clock: Callable[[], int] = monotonic_ms,
    ):
        self.config = config or PluginConfig()
        self.clock = clock
        self.session = Session()

    def attach(self, dispatcher: EventDispatcher) -> None:
        """Register the lifecycle handlers. Does nothing when disabled."""
        if not self.config.enabled:
            logger.debug("Subtitles plugin disabled; not attaching")
            return
        dispatcher.on(event.TEST_BEFORE, self.on_test_before)
        dispatcher.on(event.STEP_STARTED, self.on_step_started)
        dispatcher.on(event.STEP_FINISHED, self.on_step_finished)
        dispatcher.on(event.TEST_AFTER, self.on_test_after)

    def detach(self, dispatcher: EventDispatcher) -> None:
        dispatcher.off(event.TEST_BEFORE, self.on_test_before)
        dispatcher.off(event.STEP_STARTED, self.on_step_started)
        dispatcher.off(event.STEP_FINISHED, self.on_step_finished)
        dispatcher.off(event.TEST_AFTER, self.on_test_after)

    def on_test_before(self, _test: Test | None = None) -> None:
        self.session.reset(self.clock())

    def on_step_started(self, step: Step) -> None:
        record = self.session.record_start(step, self.clock())
        logger.debug("Step started at %s: %s", record.start, record.title)

    def on_step_finished(self, step: Step | None) -> None:
        self.session.record_finish(step, self.clock())

    def on_test_after(self, test: Test | None) -> None:
        artifacts = getattr(test, "artifacts", None)
        video = artifacts.get("video") if artifacts else None
        if not video:
            logger.debug("No video artifact; skipping subtitle")
            return
        output_path = write_subtitles(
            self.session.finished_steps(), video, self.config.subtitle_format
        )
        artifacts["subtitle"] = str(output_path)
