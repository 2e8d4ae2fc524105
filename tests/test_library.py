"""Tests for the saved-script library."""

import json

import pytest

from scriptgen.library import InMemoryScriptLibrary, JsonScriptLibrary
from scriptgen.models import GenerationPayload, GenerationResult, SeriesBible

from .conftest import build_payload


def make_result(result_id: str, title: str = "Khu vườn bí mật của An") -> GenerationResult:
    payload = build_payload()
    payload["optimizedScript"]["seo"]["tieu_de"] = title
    parsed = GenerationPayload.model_validate(payload)
    return GenerationResult.from_payload(
        parsed,
        result_id=result_id,
        series_bible=SeriesBible.from_overview(parsed.optimized_script.overview),
    )


@pytest.fixture(params=["memory", "json"])
def library(request, temp_dir):
    if request.param == "memory":
        return InMemoryScriptLibrary()
    return JsonScriptLibrary(temp_dir / "library.json")


class TestScriptLibrary:
    """Behaviour shared by every library implementation."""

    def test_empty(self, library):
        assert library.list() == []
        assert library.get("analysis_1") is None
        assert not library.contains("analysis_1")

    def test_most_recent_first(self, library):
        for result_id in ["analysis_1", "series_2", "series_3"]:
            library.save(make_result(result_id))

        assert [entry.id for entry in library.list()] == ["series_3", "series_2", "analysis_1"]

    def test_save_replaces_and_moves_to_front(self, library):
        for result_id in ["analysis_1", "series_2", "series_3"]:
            library.save(make_result(result_id))

        library.save(make_result("analysis_1", title="Updated"))

        entries = library.list()
        assert [entry.id for entry in entries] == ["analysis_1", "series_3", "series_2"]
        assert entries[0].optimized_script.seo.title == "Updated"

    def test_delete(self, library):
        for result_id in ["analysis_1700000000000", "series_1700000000001", "series_1700000000002"]:
            library.save(make_result(result_id))

        assert library.delete("analysis_1700000000000")

        ids = [entry.id for entry in library.list()]
        assert ids == ["series_1700000000002", "series_1700000000001"]

    def test_delete_missing(self, library):
        library.save(make_result("analysis_1"))
        assert not library.delete("analysis_2")
        assert len(library.list()) == 1

    def test_round_trip(self, library):
        result = make_result("analysis_1")
        library.save(result)
        assert library.get("analysis_1") == result


class TestJsonScriptLibrary:
    """Tests for the JSON file library."""

    def test_file_uses_wire_names(self, temp_dir):
        path = temp_dir / "nested" / "library.json"
        JsonScriptLibrary(path).save(make_result("analysis_1"))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data[0]["id"] == "analysis_1"
        assert "seriesBible" in data[0]
        assert "tieu_de" in data[0]["optimizedScript"]["seo"]

    def test_persists_across_instances(self, temp_dir):
        path = temp_dir / "library.json"
        JsonScriptLibrary(path).save(make_result("analysis_1"))
        assert JsonScriptLibrary(path).contains("analysis_1")

    def test_corrupt_file_reads_as_empty(self, temp_dir):
        path = temp_dir / "library.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonScriptLibrary(path).list() == []


    def test_corrupt_file_moved_aside_on_save(self, temp_dir):
        path = temp_dir / "library.json"
        path.write_text("{not json", encoding="utf-8")

        JsonScriptLibrary(path).save(make_result("analysis_1"))

        assert (temp_dir / "library.json.corrupt").read_text(encoding="utf-8") == "{not json"
        assert [entry.id for entry in JsonScriptLibrary(path).list()] == ["analysis_1"]

    def test_non_array_file_reads_as_empty(self, temp_dir):
        path = temp_dir / "library.json"
        path.write_text('{"id": "analysis_1"}', encoding="utf-8")
        assert JsonScriptLibrary(path).list() == []


class TestInvalidEntries:
    """Entries that no longer validate are skipped but never dropped."""

    @pytest.fixture
    def path(self, temp_dir):
        path = temp_dir / "library.json"
        library = JsonScriptLibrary(path)
        for result_id in ["analysis_1", "series_2", "series_3"]:
            library.save(make_result(result_id))

        data = json.loads(path.read_text(encoding="utf-8"))
        del data[1]["suggestions"]
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path

    def _file_ids(self, path):
        return [item["id"] for item in json.loads(path.read_text(encoding="utf-8"))]

    def test_skipped_when_listing(self, path):
        assert [entry.id for entry in JsonScriptLibrary(path).list()] == ["series_3", "analysis_1"]

    def test_survives_save(self, path):
        JsonScriptLibrary(path).save(make_result("analysis_4"))

        assert self._file_ids(path) == ["analysis_4", "series_3", "analysis_1", "series_2"]
        assert "suggestions" not in json.loads(path.read_text(encoding="utf-8"))[3]

    def test_survives_delete(self, path):
        assert JsonScriptLibrary(path).delete("analysis_1")
        assert self._file_ids(path) == ["series_3", "series_2"]

    def test_replaced_by_save_with_same_id(self, path):
        library = JsonScriptLibrary(path)
        library.save(make_result("series_2", title="Fixed"))

        assert self._file_ids(path) == ["series_2", "series_3", "analysis_1"]
        assert library.get("series_2").optimized_script.seo.title == "Fixed"

    def test_only_invalid_entries(self, temp_dir):
        path = temp_dir / "library.json"
        path.write_text('[{"id": "analysis_1"}]', encoding="utf-8")

        library = JsonScriptLibrary(path)
        assert library.list() == []

        library.save(make_result("analysis_2"))
        assert self._file_ids(path) == ["analysis_2", "analysis_1"]


class TestAtomicWrites:
    """Writes replace the library file in one step."""

    def test_no_temporary_files_left(self, temp_dir):
        library = JsonScriptLibrary(temp_dir / "library.json")
        library.save(make_result("analysis_1"))
        library.save(make_result("analysis_2"))

        assert [p.name for p in temp_dir.iterdir()] == ["library.json"]

    def test_failed_write_keeps_previous_file(self, temp_dir, monkeypatch):
        path = temp_dir / "library.json"
        library = JsonScriptLibrary(path)
        library.save(make_result("analysis_1"))
        before = path.read_text(encoding="utf-8")

        def fail(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr("scriptgen.library.json.dump", fail)
        with pytest.raises(OSError, match="disk full"):
            library.save(make_result("analysis_2"))

        assert path.read_text(encoding="utf-8") == before
        assert [p.name for p in temp_dir.iterdir()] == ["library.json"]
