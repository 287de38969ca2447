"""Domain value objects for jwp-wrap.

Request and response payloads live in :mod:`jwp_wrap.core.requests`
and :mod:`jwp_wrap.core.responses`.  This module holds the objects
that have no wire representation of their own: they are **frozen**
dataclasses and enums, carry zero I/O, and are built by the core
services.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ApiVersion(enum.Enum):
    """Platform API generation an endpoint belongs to."""

    V1 = "v1"
    V2 = "v2"


class AnalyticsMetric(enum.Enum):
    """Metric field names understood by the analytics decoder.

    The values are the exact ``field`` strings used in the analytics
    column headers.  Anything else is ignored by the decoder.
    """

    PLAYS = "plays"
    COMPLETE_RATE = "complete_rate"
    UNIQUE_VIEWERS = "unique_viewers"
    PLAY_RATE = "play_rate"
    EMBEDS = "embeds"
    COMPLETES = "completes"
    CONTENT_SCORE = "content_score"

    @classmethod
    def from_field(cls, field: object) -> AnalyticsMetric | None:
        """Return the member whose value equals *field*, or ``None``."""
        for member in cls:
            if member.value == field:
                return member
        return None

    @property
    def attribute(self) -> str:
        """Name of the matching :class:`VideoStats` attribute."""
        return self.value


# ---------------------------------------------------------------------------
# Analytics result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VideoStats:
    """Per-video analytics totals.

    Every metric defaults to ``None`` meaning "not reported".  A
    statistics object with all fields unset is the valid answer for a
    video without any recorded activity in the requested range.
    """

    plays: int | float | None = None
    complete_rate: int | float | None = None
    unique_viewers: int | float | None = None
    play_rate: int | float | None = None
    embeds: int | float | None = None
    completes: int | float | None = None
    content_score: int | float | None = None

    def is_empty(self) -> bool:
        """Return ``True`` when no metric was reported."""
        return all(
            getattr(self, metric.attribute) is None for metric in AnalyticsMetric
        )


# ---------------------------------------------------------------------------
# Downloaded thumbnail
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ThumbnailResource:
    """A thumbnail downloaded to a local temporary file.

    The caller owns :attr:`path` and is responsible for deleting it.
    """

    name: str
    """Remote resource name (``<video_key>-<width>.jpg``)."""

    path: Path
    """Local file holding the downloaded bytes."""

    content_type: str | None = None
    """MIME type of the content.  Never populated; no sniffing is done."""
