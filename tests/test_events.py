"""Tests for calendar event derivation and filtering"""

import random
from datetime import date

from contract_manager.models import CustomTask, EventCategory, JsonValue, TextValue
from contract_manager.services.events import (
    CUSTOM_DOCUMENT_ID,
    classify_field,
    derive_events,
    filter_events,
)

NOW = date(2025, 2, 15)


class TestClassifyField:

    def test_keywords(self):
        assert classify_field("Fecha de renovación") == EventCategory.RENEWAL
        assert classify_field("Fecha de pago") == EventCategory.PAYMENT
        assert classify_field("Auditoría anual") == EventCategory.AUDIT
        assert classify_field("Review date") == EventCategory.REVIEW
        assert classify_field("Plazo de preaviso") == EventCategory.DEADLINE
        assert classify_field("Fecha de vencimiento") == EventCategory.EXPIRY
        assert classify_field("Random Note") == EventCategory.OTHER

    def test_first_matching_category_wins(self):
        # Matches both renewal and payment; renewal is checked first
        assert classify_field("Pago de renovación") == EventCategory.RENEWAL


class TestDeriveEvents:

    def test_payment_field_becomes_event(self, make_document):
        doc = make_document(renewal_date=None, fields={"Fecha de pago": "15/06/2025"})
        events = derive_events([doc])
        assert len(events) == 1
        event = events[0]
        assert event.event_type == EventCategory.PAYMENT
        assert event.date == date(2025, 6, 15)
        assert event.id == "doc1-Fecha de pago"
        assert event.title == "Fecha de pago"
        assert event.description == "15/06/2025"

    def test_field_without_date_yields_nothing(self, make_document):
        doc = make_document(renewal_date=None, fields={"Random Note": "see appendix"})
        assert derive_events([doc]) == []

    def test_json_values_are_skipped(self, make_document):
        doc = make_document(renewal_date=None)
        doc.extracted_data["Pagos"] = JsonValue(value={"fecha": "2025-06-15"})
        assert derive_events([doc]) == []

    def test_renewal_event(self, make_document):
        events = derive_events([make_document()])
        assert len(events) == 1
        event = events[0]
        assert event.id == "doc1-renewal"
        assert event.event_type == EventCategory.RENEWAL
        assert event.title == "Renovación: doc1.pdf"
        assert event.description == "Servicios"

    def test_renewal_title_in_english(self, make_document):
        events = derive_events([make_document()], language="en")
        assert events[0].title == "Renewal: doc1.pdf"

    def test_exactly_one_renewal_when_field_repeats_renewal_date(self, make_document):
        doc = make_document(fields={"Fecha de renovación": "2025-03-01"})
        renewals = [e for e in derive_events([doc]) if e.event_type == EventCategory.RENEWAL]
        assert len(renewals) == 1
        assert renewals[0].id == "doc1-renewal"

    def test_renewal_field_with_other_date_is_kept(self, make_document):
        doc = make_document(fields={"Prórroga": "2026-03-01"})
        dates = [e.date for e in derive_events([doc]) if e.event_type == EventCategory.RENEWAL]
        assert dates == [date(2025, 3, 1), date(2026, 3, 1)]

    def test_sorted_by_date(self, make_document):
        docs = [
            make_document("a", renewal_date=date(2025, 9, 1), fields={"Fecha de pago": "2025-01-10"}),
            make_document("b", renewal_date=date(2025, 4, 1), fields={"Auditoría": "1 de mayo de 2025"}),
        ]
        dates = [e.date for e in derive_events(docs)]
        assert dates == sorted(dates)
        assert len(dates) == 4

    def test_document_order_does_not_change_dates(self, make_document):
        docs = [
            make_document(f"d{i}", renewal_date=date(2025, 1 + i, 10), fields={"Fecha de pago": f"2025-0{9 - i}-01"})
            for i in range(5)
        ]
        expected = [e.date for e in derive_events(docs)]
        shuffled = docs[:]
        random.Random(7).shuffle(shuffled)
        assert [e.date for e in derive_events(shuffled)] == expected

    def test_tasks_become_manual_events(self, make_document):
        task = CustomTask(
            id="t1", title="Llamar al proveedor", date=date(2025, 2, 20),
            event_type=EventCategory.REVIEW,
        )
        events = derive_events([make_document()], [task])
        manual = [e for e in events if e.document_id == CUSTOM_DOCUMENT_ID]
        assert len(manual) == 1
        assert manual[0].file_name == "Tarea Manual"
        assert manual[0].event_type == EventCategory.REVIEW
        assert events[0].id == "t1"

    def test_every_event_has_a_date(self, make_document):
        doc = make_document(fields={
            "Fecha de pago": "31/02/2025",
            "Vigencia": "sin fecha",
            "Fecha límite": "2025-05-05",
        })
        events = derive_events([doc])
        assert all(isinstance(e.date, date) for e in events)
        assert {e.title for e in events} == {"Renovación: doc1.pdf", "Fecha límite"}


class TestFilterEvents:

    def _events(self, make_document):
        docs = [
            make_document("a", file_name="Alquiler oficina.pdf", renewal_date=date(2025, 2, 20)),
            make_document("b", file_name="Seguro flota.pdf", renewal_date=date(2025, 12, 1),
                          fields={"Fecha de pago": "2025-03-10"}),
        ]
        return derive_events(docs)

    def test_search_matches_file_name_and_title(self, make_document):
        events = self._events(make_document)
        assert {e.document_id for e in filter_events(events, NOW, search="alquiler")} == {"a"}
        assert [e.title for e in filter_events(events, NOW, search="PAGO")] == ["Fecha de pago"]

    def test_filter_by_type(self, make_document):
        events = self._events(make_document)
        result = filter_events(events, NOW, event_type="payment")
        assert [e.event_type for e in result] == [EventCategory.PAYMENT]
        assert len(filter_events(events, NOW, event_type="all")) == 3

    def test_filter_by_status(self, make_document):
        events = self._events(make_document)
        assert [e.document_id for e in filter_events(events, NOW, status="urgent")] == ["a"]
        assert [e.title for e in filter_events(events, NOW, status="upcoming")] == ["Fecha de pago"]
        assert [e.document_id for e in filter_events(events, NOW, status="active")] == ["b"]
