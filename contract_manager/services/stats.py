"""Aggregation over documents and derived events"""

from collections import Counter
from datetime import date, datetime, timedelta
from typing import Iterable, List, Union

from contract_manager.models.contract import ContractDocument
from contract_manager.models.event import CalendarEvent, EventCategory, UrgencyStatus
from contract_manager.models.stats import DashboardStats, SectorCount, Stats
from contract_manager.services.status import document_status
from contract_manager.utils.dates import to_date

HIGH_RISK_SCORE = 7
MEDIUM_RISK_SCORE = 4
EXPIRING_SOON_DAYS = 30
UNCLASSIFIED_SECTOR = "Unclassified"


def compute_stats(
    documents: Iterable[ContractDocument],
    events: Iterable[CalendarEvent],
    now: Union[date, datetime],
) -> Stats:
    """Urgency buckets for documents and per-category event counts.

    Every category appears in event_type_counts, with zero when unused.
    """
    documents = list(documents)
    events = list(events)

    buckets = Counter(document_status(doc, now) for doc in documents)
    type_counts = {category.value: 0 for category in EventCategory}
    for event in events:
        type_counts[event.event_type.value] += 1

    return Stats(
        urgent=buckets[UrgencyStatus.URGENT],
        upcoming=buckets[UrgencyStatus.UPCOMING],
        active=buckets[UrgencyStatus.ACTIVE],
        expired=buckets[UrgencyStatus.EXPIRED],
        total=len(documents),
        total_events=len(events),
        event_type_counts=type_counts,
    )


def compute_dashboard_stats(
    documents: Iterable[ContractDocument],
    now: Union[date, datetime],
) -> DashboardStats:
    """Risk and renewal overview for the dashboard cards"""
    documents = list(documents)
    today = to_date(now)
    horizon = today + timedelta(days=EXPIRING_SOON_DAYS)

    high_risk = sum(1 for d in documents if (d.risk_score or 0) >= HIGH_RISK_SCORE)
    medium_risk = sum(
        1 for d in documents if MEDIUM_RISK_SCORE <= (d.risk_score or 0) < HIGH_RISK_SCORE
    )
    expiring_soon = sum(
        1 for d in documents
        if d.renewal_date is not None and today <= d.renewal_date <= horizon
    )

    return DashboardStats(
        total=len(documents),
        high_risk=high_risk,
        medium_risk=medium_risk,
        expiring_soon=expiring_soon,
        top_sectors=top_sectors(documents),
    )


def top_sectors(documents: Iterable[ContractDocument], limit: int = 3) -> List[SectorCount]:
    """Most common sectors, largest first; ties keep first-seen order"""
    counts = Counter(d.sector or UNCLASSIFIED_SECTOR for d in documents)
    return [SectorCount(sector=s, count=c) for s, c in counts.most_common(limit)]
