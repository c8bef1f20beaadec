"""Tests for saved edit drafts"""

from datetime import datetime, timedelta

from contract_manager.services.drafts import DraftStore

SAVED = datetime(2025, 2, 15, 9, 0)


class TestDraftStore:

    def test_save_and_load(self, tmp_path):
        drafts = DraftStore(str(tmp_path), ttl_hours=24)
        drafts.save("c1", {"Fecha de pago": "2025-06-15"}, now=SAVED)
        draft = drafts.load("c1", now=SAVED + timedelta(hours=1))
        assert draft is not None
        assert draft.fields == {"Fecha de pago": "2025-06-15"}

    def test_stale_draft_is_discarded(self, tmp_path):
        drafts = DraftStore(str(tmp_path), ttl_hours=24)
        drafts.save("c1", {"a": "b"}, now=SAVED)
        assert drafts.load("c1", now=SAVED + timedelta(hours=25)) is None
        # Deleted on load, so even an earlier clock finds nothing
        assert drafts.load("c1", now=SAVED) is None

    def test_unreadable_draft_is_discarded(self, tmp_path):
        drafts = DraftStore(str(tmp_path))
        drafts.save("c1", {"a": "b"})
        path = next(tmp_path.iterdir())
        path.write_text("{broken", encoding="utf-8")
        assert drafts.load("c1") is None
        assert not path.exists()

    def test_discard(self, tmp_path):
        drafts = DraftStore(str(tmp_path))
        drafts.save("c1", {"a": "b"})
        drafts.discard("c1")
        drafts.discard("c1")
        assert drafts.load("c1") is None

    def test_contract_id_is_sanitized(self, tmp_path):
        drafts = DraftStore(str(tmp_path))
        drafts.save("../etc/passwd", {"a": "b"})
        assert [p.parent for p in tmp_path.iterdir()] == [tmp_path]

    def test_similar_ids_do_not_share_a_file(self, tmp_path):
        drafts = DraftStore(str(tmp_path))
        drafts.save("a/b", {"x": "1"})
        drafts.save("a_b", {"x": "2"})
        assert drafts.load("a/b").fields == {"x": "1"}
        assert drafts.load("a_b").fields == {"x": "2"}
        assert len(list(tmp_path.iterdir())) == 2
