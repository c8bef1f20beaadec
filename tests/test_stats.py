"""Tests for calendar and dashboard statistics"""

from datetime import date

from contract_manager.models import EventCategory
from contract_manager.services.events import derive_events
from contract_manager.services.stats import compute_dashboard_stats, compute_stats, top_sectors

NOW = date(2025, 2, 15)


class TestComputeStats:

    def test_empty_input_zero_fills_every_category(self):
        stats = compute_stats([], [], NOW)
        assert stats.total == 0
        assert stats.total_events == 0
        assert stats.urgent == stats.upcoming == stats.active == stats.expired == 0
        assert set(stats.event_type_counts) == {c.value for c in EventCategory}
        assert all(count == 0 for count in stats.event_type_counts.values())

    def test_buckets_sum_to_total(self, make_document):
        docs = [
            make_document("a", renewal_date=date(2025, 2, 20)),   # urgent
            make_document("b", renewal_date=date(2025, 3, 30)),   # upcoming
            make_document("c", renewal_date=date(2025, 8, 1)),    # active
            make_document("d", renewal_date=date(2025, 1, 1)),    # expired
            make_document("e", renewal_date=None),                # active
        ]
        stats = compute_stats(docs, derive_events(docs), NOW)
        assert (stats.urgent, stats.upcoming, stats.active, stats.expired) == (1, 1, 2, 1)
        assert stats.urgent + stats.upcoming + stats.active + stats.expired == stats.total == 5

    def test_event_counts(self, make_document):
        docs = [make_document(fields={"Fecha de pago": "2025-04-01", "Cuota": "2025-05-01"})]
        events = derive_events(docs)
        stats = compute_stats(docs, events, NOW)
        assert stats.total_events == 3
        assert stats.event_type_counts["payment"] == 2
        assert stats.event_type_counts["renewal"] == 1
        assert stats.event_type_counts["audit"] == 0
        assert sum(stats.event_type_counts.values()) == stats.total_events


class TestDashboardStats:

    def test_risk_and_expiring(self, make_document):
        docs = [
            make_document("a", risk_score=8.5, renewal_date=date(2025, 3, 1)),
            make_document("b", risk_score=7, renewal_date=date(2025, 3, 17)),
            make_document("c", risk_score=4, renewal_date=date(2025, 3, 18)),
            make_document("d", risk_score=3.9, renewal_date=date(2025, 2, 14)),
            make_document("e", risk_score=None, renewal_date=None),
        ]
        stats = compute_dashboard_stats(docs, NOW)
        assert stats.total == 5
        assert stats.high_risk == 2
        assert stats.medium_risk == 1
        assert stats.expiring_soon == 2

    def test_top_sectors(self, make_document):
        docs = [
            make_document("a", sector="Legal"),
            make_document("b", sector="Legal"),
            make_document("c", sector=None),
            make_document("d", sector="Salud"),
            make_document("e", sector="Energía"),
            make_document("f", sector="Salud"),
        ]
        result = top_sectors(docs)
        assert [(s.sector, s.count) for s in result] == [("Legal", 2), ("Salud", 2), ("Unclassified", 1)]
