"""Local log of rated pages the user has visited."""

import logging
import math
import threading
import time
from collections import Counter
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError
from ..models.engagement import DomainCount, EngagementEvent, WeeklySummary

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000
RETENTION_DAYS = 90
SUMMARY_DAYS = 7
TOP_DOMAINS = 5


def _percent(part: int, total: int) -> int:
    # Half rounds up
    return int(math.floor(part * 100 / total + 0.5)) if total else 0


class EngagementLog:
    """Append-only engagement history trimmed to the last 90 days."""

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        enabled: bool = True,
        reliable_threshold: float = 7,
    ):
        """Initialize the log.

        Args:
            clock: Returns the current time in seconds since the epoch
            enabled: Whether new engagements are recorded
            reliable_threshold: Minimum rating counted as reliable
        """
        self._clock = clock
        self._enabled = enabled
        self._threshold = reliable_threshold
        self._events: List[EngagementEvent] = []
        self._lock = threading.Lock()

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def log_engagement(
        self, event: Union[EngagementEvent, Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """Record a visit.

        Args:
            event: Event, or a payload with ``domain``, ``rating`` and
                optionally ``reliable`` and ``ts``

        Returns:
            ``{"ok": True}``, or ``{"ok": True, "skipped": True}`` while
            logging is disabled

        Raises:
            ValidationError: Payload is not a valid event
        """
        if not self._enabled:
            logger.debug("Engagement logging disabled, event skipped")
            return {"ok": True, "skipped": True}

        if not isinstance(event, EngagementEvent):
            payload = dict(event or {})
            if not payload.get("ts"):
                payload["ts"] = self._now_ms()
            payload["reliable"] = bool(payload.get("reliable"))
            try:
                event = EngagementEvent(**payload)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid engagement event: {e.errors()[0]['msg']}")

        cutoff = self._now_ms() - RETENTION_DAYS * DAY_MS
        with self._lock:
            self._events = [e for e in self._events if e.ts >= cutoff]
            self._events.append(event)
        return {"ok": True}

    def record_visit(self, domain: str, rating: float) -> Dict[str, Any]:
        """Log a visit, deriving the reliable flag from the threshold."""
        return self.log_engagement(
            EngagementEvent(
                domain=domain,
                rating=rating,
                reliable=rating >= self._threshold,
                ts=self._now_ms(),
            )
        )

    def weekly_summary(self) -> WeeklySummary:
        """Summarize engagements from the last seven days."""
        week_ago = self._now_ms() - SUMMARY_DAYS * DAY_MS
        with self._lock:
            recent = [e for e in self._events if e.ts >= week_ago]

        total = len(recent)
        reliable = sum(1 for e in recent if e.reliable)
        unreliable = total - reliable
        counts = Counter(e.domain for e in recent)

        return WeeklySummary(
            total=total,
            reliable=reliable,
            unreliable=unreliable,
            reliablePct=_percent(reliable, total),
            unreliablePct=_percent(unreliable, total),
            topDomains=[
                DomainCount(domain=domain, count=count)
                for domain, count in counts.most_common(TOP_DOMAINS)
            ],
        )

    def events(self) -> List[EngagementEvent]:
        """Retained events, oldest first."""
        with self._lock:
            return list(self._events)

    def set_enabled(self, enabled: bool) -> None:
        """Turn recording on or off."""
        self._enabled = bool(enabled)
        logger.info(f"Engagement logging {'enabled' if self._enabled else 'disabled'}")

    @property
    def enabled(self) -> bool:
        """Whether new engagements are recorded."""
        return self._enabled

    @property
    def reliable_threshold(self) -> float:
        """Minimum rating counted as reliable."""
        return self._threshold

    def weekly_message(self, summary: Optional[WeeklySummary] = None) -> str:
        """Text of the weekly feedback notification."""
        summary = summary or self.weekly_summary()
        if not summary.total:
            return "No engagements logged this week. Browse to see insights!"
        return (
            f"This week: {summary.reliablePct}% reliable, "
            f"{summary.unreliablePct}% unreliable across {summary.total} engagements."
        )
