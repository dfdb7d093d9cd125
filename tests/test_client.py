"""
Tests for the ChanSearchClient facade.
"""

import pytest

from chansearch import ChanSearchClient, SearchConfig, SearchFilters
from chansearch.adapters import FourChanAdapter


class TestClient:
    """Test suite for ChanSearchClient."""

    def setup_method(self):
        self.client = ChanSearchClient()

    def test_default_adapter(self):
        assert self.client.available_sources() == ["4chan"]

    def test_duplicate_adapter_rejected(self):
        with pytest.raises(KeyError):
            self.client.register_adapter(FourChanAdapter())
        self.client.register_adapter(FourChanAdapter, override=True)

    def test_unknown_source(self, sample_catalog):
        with pytest.raises(KeyError):
            self.client.parse_catalog("8kun", sample_catalog, "g")

    def test_search_one_board_with_filters(self, sample_catalog):
        threads = self.client.parse_catalog("4chan", sample_catalog, "g")
        catalogs = {"g": threads}

        assert [t.number for t in self.client.search(catalogs, "desktop", board_abv="g")] == ["1001", "1003"]

        filters = SearchFilters(file_types=["JPEG"])
        result = self.client.search(catalogs, "desktop", board_abv=" g ", filters=filters)
        assert [t.number for t in result] == ["1003"]

    def test_search_all_boards(self, make_thread):
        catalogs = {
            "g": [make_thread(number="1", title="desktop")],
            "wg": [make_thread(number="2", title="desktop")],
        }
        assert [t.number for t in self.client.search(catalogs, "desktop")] == ["1", "2"]
        assert self.client.search(catalogs, "desktop", board_abv="x") == []

    def test_search_records_history(self, make_thread):
        self.client.search({"g": []}, "  Desktop ", board_abv="g")
        self.client.search({"g": []}, "phones", record_history=False)
        self.client.search({"g": []}, "   ")
        assert [(h.query, h.board_abv) for h in self.client.store.history()] == [("Desktop", "g")]

    def test_save_metadata_rejects_unknown_format(self, tmp_path):
        with pytest.raises(ValueError):
            self.client.save_metadata([], str(tmp_path / "threads.txt"))

    def test_save_metadata(self, tmp_path, make_thread):
        out = tmp_path / "threads.csv"
        written = self.client.save_metadata([make_thread()], str(out))
        assert written == out
        assert out.exists()

    def test_save_metadata_suffix_is_case_insensitive(self, tmp_path, make_thread):
        written = self.client.save_metadata([make_thread(number="3")], tmp_path / "threads.JSONL")
        assert written.read_text(encoding="utf-8").count("\n") == 1

    def test_state_path_none_does_not_write(self):
        assert self.client.save_state() is None


class TestClientPersistence:
    """Test suite for client state handling."""

    def test_autosave_and_reload(self, tmp_path, make_thread):
        path = tmp_path / "search_state.json"
        client = ChanSearchClient(SearchConfig(state_path=path))
        saved = client.save_search("desktop", board_abv="g")
        assert path.exists()

        client.check_saved_searches({"g": [make_thread(number="1", title="desktop")]})

        again = ChanSearchClient(SearchConfig(state_path=path))
        assert [s.id for s in again.saved_searches()] == [saved.id]
        alerts = again.check_saved_searches(
            {"g": [make_thread(number="1", title="desktop"), make_thread(number="2", title="desktop")]}
        )
        assert [t.number for t in alerts[0].new_matches] == ["2"]

    def test_no_autosave(self, tmp_path):
        path = tmp_path / "search_state.json"
        client = ChanSearchClient(SearchConfig(state_path=path, autosave=False))
        client.save_search("desktop")
        assert not path.exists()
        client.close()
        assert path.exists()

    def test_update_and_delete(self, tmp_path):
        client = ChanSearchClient(SearchConfig(state_path=tmp_path / "s.json"))
        saved = client.save_search("desktop")
        updated = client.update_saved_search(saved.model_copy(update={"name": "Desktops"}))
        assert client.saved_searches()[0].name == "Desktops"
        client.delete_saved_search(updated.id)
        assert client.saved_searches() == []
