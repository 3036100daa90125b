"""Core data schema for browsing events and analytics results."""

from dataclasses import asdict, dataclass, field
from typing import Optional

OVERLAY_SHOWN = "overlay_shown"
INTENTION_SUBMITTED = "intention_submitted"
TIMER_STARTED = "timer_started"
TIMER_EXPIRED = "timer_expired"

EVENT_TYPES = frozenset({OVERLAY_SHOWN, INTENTION_SUBMITTED, TIMER_STARTED, TIMER_EXPIRED})


@dataclass(frozen=True)
class EventRecord:
    """Immutable usage event as recorded by the extension."""

    type: str
    domain: str
    timestamp: int
    intention: Optional[str] = None
    tab_id: Optional[int] = None
    minutes: Optional[int] = None


@dataclass
class DailyDomainCounts:
    """Counters for one domain on one local calendar day."""

    date: str
    overlay_shown: int = 0
    intention_submitted: int = 0
    no_intention: int = 0


@dataclass
class HourlyDomainCounts:
    """Counters for one domain in one local calendar hour."""

    hour: str
    overlay_shown: int = 0
    intention_submitted: int = 0
    no_intention: int = 0


@dataclass(frozen=True)
class IntentionVariant:
    text: str
    count: int


@dataclass(frozen=True)
class TopIntention:
    """A ranked cluster of near-duplicate intentions."""

    text: str
    count: int
    variants: list[IntentionVariant] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
