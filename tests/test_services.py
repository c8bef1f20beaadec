"""Tests for the contract, calendar and team services over SQLite"""

from datetime import date

import pytest

from contract_manager.models import EventCategory, MemberStatus, TaskStatus
from contract_manager.models.team import status_label
from contract_manager.services.calendar import CalendarService
from contract_manager.services.contracts import ContractService
from contract_manager.services.drafts import DraftStore
from contract_manager.services.table import SortDirection
from contract_manager.services.team import TeamService

NOW = date(2025, 2, 15)


@pytest.fixture
def contracts(store, tmp_path):
    return ContractService(store, DraftStore(str(tmp_path / "drafts")))


@pytest.fixture
def seeded(contracts, make_document):
    contracts.save(make_document("a", file_name="Alquiler.pdf", renewal_date=date(2025, 2, 20),
                                 fields={"Fecha de pago": "15/06/2025"}), user_id="u1")
    contracts.save(make_document("b", file_name="Seguro.pdf", renewal_date=None), user_id="u1")
    contracts.save(make_document("c", file_name="Otro.pdf"), user_id="u2")
    return contracts


class TestContractService:

    def test_table_scoped_and_nulls_last(self, seeded):
        page = seeded.table(user_id="u1", sort_field="renewal_date", direction=SortDirection.DESC)
        assert [d.id for d in page.items] == ["a", "b"]

    def test_table_rejects_unknown_sort(self, seeded):
        with pytest.raises(ValueError):
            seeded.table(user_id="u1", sort_field="password")

    def test_table_status_filter(self, seeded):
        page = seeded.table(user_id="u1", status="urgent", now=NOW)
        assert [d.id for d in page.items] == ["a"]

    def test_rename(self, seeded):
        assert seeded.rename("a", "  Nuevo.pdf ").file_name == "Nuevo.pdf"
        with pytest.raises(ValueError):
            seeded.rename("a", "   ")
        assert seeded.rename("missing", "x.pdf") is None

    def test_update_fields_discards_draft(self, seeded):
        seeded.save_draft("a", {"Fecha de pago": "2025-07-01"})
        doc = seeded.update_fields("a", {"Fecha de pago": "2025-07-01"})
        assert doc.extracted_data["Fecha de pago"].value == "2025-07-01"
        assert seeded.load_draft("a") is None

    def test_apply_reanalysis_keeps_found_values(self, seeded):
        doc = seeded.apply_reanalysis("a", {"Fecha de pago": "No especificado", "Auditoría": "2025-09-01"})
        assert doc.extracted_data["Fecha de pago"].value == "15/06/2025"
        assert doc.extracted_data["Auditoría"].value == "2025-09-01"

    def test_badge(self, seeded):
        assert seeded.badge(seeded.get("a"), NOW) == "due_soon"
        assert seeded.badge(seeded.get("b"), NOW) is None

    def test_update_tags_dedupes(self, seeded):
        assert seeded.update_tags("a", ["urgente", "legal", "urgente"]).tags == ["legal", "urgente"]

    def test_delete(self, seeded):
        assert seeded.delete("a") is True
        assert seeded.get("a") is None


class TestCalendarService:

    def test_events_include_tasks(self, seeded, store):
        calendar = CalendarService(store)
        calendar.add_task("u1", "Llamar", date(2025, 2, 16), event_type=EventCategory.REVIEW)
        events = calendar.events("u1")
        assert [e.title for e in events] == ["Llamar", "Renovación: Alquiler.pdf", "Fecha de pago"]

    def test_add_task_requires_title(self, store):
        with pytest.raises(ValueError):
            CalendarService(store).add_task("u1", " ", date(2025, 2, 16))

    def test_stats_and_grid(self, seeded, store):
        calendar = CalendarService(store)
        stats = calendar.stats("u1", NOW)
        assert (stats.total, stats.urgent, stats.active) == (2, 1, 1)
        grid = calendar.month_grid("u1", 2025, 6)
        assert [e.title for e in grid.days[14].events] == ["Fecha de pago"]

    def test_export(self, seeded, store):
        calendar = CalendarService(store, language="en")
        text = calendar.export(calendar.events("u1"))
        assert "SUMMARY:🔄 Renewal: Alquiler.pdf" in text


class TestTeamService:

    def test_members(self, store):
        team = TeamService(store)
        member = team.add_member("u1", "Ana", " Ana@Example.com ")
        assert member.email == "ana@example.com"
        with pytest.raises(ValueError):
            team.add_member("u1", "Ana", "not-an-email")
        assert [m.id for m in team.list_members("u1")] == [member.id]
        assert team.remove_member("u1", member.id) is True

    def test_tasks(self, store):
        team = TeamService(store)
        member = team.add_member("u1", "Ana", "ana@example.com")
        task = team.create_task("u1", "Revisar contrato", assigned_to=member.id, due_date=date(2025, 3, 1))
        assert task.status == TaskStatus.PENDING
        updated = team.update_task(task.id, status=TaskStatus.COMPLETED)
        assert updated.status == TaskStatus.COMPLETED
        with pytest.raises(ValueError):
            team.update_task(task.id)
        with pytest.raises(ValueError):
            team.create_task("u1", "x", assigned_to="stranger")
        assert team.delete_task(task.id) is True

    def test_status_labels_are_per_enum(self):
        assert status_label(TaskStatus.PENDING) == "Pendiente"
        assert status_label(MemberStatus.PENDING) == "Invitación pendiente"
        assert status_label(TaskStatus.PENDING, "en") == "Pending"
        assert status_label(MemberStatus.ACTIVE, "en") == "Active"

    def test_team_command_shows_status_labels(self, store):
        from typer.testing import CliRunner

        from contract_manager.cli.main import app

        team = TeamService(store)
        member = team.add_member("u1", "Ana", "ana@example.com")
        team.create_task("u1", "Revisar", assigned_to=member.id)
        result = CliRunner().invoke(app, ["team", "--user", "u1"], env={"COLUMNS": "200"})
        assert result.exit_code == 0
        assert "Pendiente" in result.output
        assert "Activo" in result.output
        assert "Invitación pendiente" not in result.output
