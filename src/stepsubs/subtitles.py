"""Subtitle rendering and SRT/WebVTT file writing."""

import logging
from enum import Enum
from pathlib import Path

from stepsubs.session import StepRecord
from stepsubs.timestamps import with_separator

logger = logging.getLogger(__name__)


class SubtitleFormat(str, Enum):
    """Supported subtitle grammars."""

    SRT = "SRT"
    WEBVTT = "WEBVTT"

    @classmethod
    def from_config(cls, value: object) -> "SubtitleFormat":
        """Only the exact string 'WEBVTT' selects WebVTT; anything else is SRT."""
        if value == cls.WEBVTT.value:
            return cls.WEBVTT
        return cls.SRT

    @property
    def extension(self) -> str:
        return "vtt" if self is SubtitleFormat.WEBVTT else "srt"

    @property
    def ms_separator(self) -> str:
        return "." if self is SubtitleFormat.WEBVTT else ","

    @property
    def header(self) -> str:
        return "WEBVTT\n\n" if self is SubtitleFormat.WEBVTT else ""


def render_subtitles(records: list[StepRecord], fmt: SubtitleFormat) -> str:
    """Render step records as cues numbered from 1.

    Every record must have an end offset; ``Session.finished_steps`` yields
    only those.
    """
    lines = [fmt.header]
    for index, record in enumerate(records, start=1):
        start = with_separator(record.start, fmt.ms_separator)
        end = with_separator(record.end, fmt.ms_separator)
        lines.append(f"{index}\n{start} --> {end}\n{record.title}\n\n")
    return "".join(lines)


def subtitle_path_for(video_path: str | Path, fmt: SubtitleFormat) -> Path:
    """Place the subtitle next to the video: same stem, .srt or .vtt."""
    video = Path(video_path)
    return video.parent / f"{video.stem}.{fmt.extension}"


def write_subtitles(
    records: list[StepRecord], video_path: str | Path, fmt: SubtitleFormat
) -> Path:
    """Write the subtitle file beside the video, overwriting any existing one."""
    output_path = subtitle_path_for(video_path, fmt)
    output_path.write_text(render_subtitles(records, fmt), encoding="utf-8")
    logger.info("Subtitle saved to %s", output_path)
    return output_path
