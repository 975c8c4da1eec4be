"""
Tests for project document I/O
"""

import json

import pytest

from scriptmaster.adapters.document_io import (
    deserialize_project,
    load_project,
    project_json_filename,
    save_project,
    serialize_project,
    to_document,
)
from scriptmaster.core.exceptions import InvalidDocumentError
from scriptmaster.services.propagator import LoadCoursePreset, dispatch


class TestSerialize:
    def test_pretty_printed_unicode(self, demo_project):
        text = serialize_project(demo_project)

        assert text.startswith("{\n  ")
        assert "互动场景 (Interactive Scene)" in text
        assert '"coursePresets"' in text

    def test_round_trip(self, demo_project):
        project = dispatch(demo_project, LoadCoursePreset("cp1"))
        project.segments[0].assets[0].custom_fields.update({"Remark": "r", "note": "n"})

        restored = deserialize_project(serialize_project(project))

        assert to_document(restored) == to_document(project)

    def test_unknown_fields_survive(self, demo_project):
        document = to_document(demo_project)
        document["owner"] = "Ann"
        document["templates"][0]["presets"][0]["reviewer"] = "Bo"

        restored = to_document(deserialize_project(json.dumps(document)))

        assert restored["owner"] == "Ann"
        assert restored["templates"][0]["presets"][0]["reviewer"] == "Bo"

    def test_unknown_null_fields_survive(self, demo_project):
        document = to_document(demo_project)
        document["templates"][0]["reviewer"] = None

        restored = to_document(deserialize_project(json.dumps(document)))

        assert restored["templates"][0]["reviewer"] is None
        assert restored == document


class TestDeserialize:
    """Import validation"""

    def test_accepts_bytes_and_dict(self, demo_project):
        document = to_document(demo_project)

        assert deserialize_project(document).id == "course-1"
        assert deserialize_project(json.dumps(document).encode("utf-8")).id == "course-1"

    def test_optional_fields_default(self):
        project = deserialize_project({
            "id": "p",
            "title": "Minimal",
            "templates": [{"id": "t1"}],
            "coursePresets": [],
            "segments": [{"id": "s1"}],
        })

        assert project.templates[0].presets == []
        assert project.segments[0].template_id == ""
        assert project.updated_at is None

    def test_invalid_json(self):
        with pytest.raises(InvalidDocumentError, match="Invalid project JSON"):
            deserialize_project("{not json")

    def test_not_an_object(self):
        with pytest.raises(InvalidDocumentError):
            deserialize_project("[1, 2]")

    @pytest.mark.parametrize("field", ["id", "title", "templates", "coursePresets", "segments"])
    def test_missing_required_field(self, demo_project, field):
        document = to_document(demo_project)
        del document[field]

        with pytest.raises(InvalidDocumentError) as exc_info:
            deserialize_project(document)

        assert field in exc_info.value.errors

    def test_wrong_shape_reports_location(self, demo_project):
        document = to_document(demo_project)
        document["segments"] = [{"id": "s1", "assets": "none"}]

        with pytest.raises(InvalidDocumentError) as exc_info:
            deserialize_project(document)

        assert any(error.startswith("segments.0.assets") for error in exc_info.value.errors)

    def test_unknown_type_label(self, demo_project):
        document = to_document(demo_project)
        document["templates"][0]["presets"][0]["type"] = "Sticker"

        with pytest.raises(InvalidDocumentError):
            deserialize_project(document)

    def test_no_templates(self, demo_project):
        document = to_document(demo_project)
        document["templates"] = []

        with pytest.raises(InvalidDocumentError, match="at least one template"):
            deserialize_project(document)


class TestFiles:
    def test_save_stamps_updated_at(self, demo_project, tmp_path):
        path = tmp_path / "docs" / "lesson.json"

        saved = save_project(demo_project, path)

        assert saved.updated_at is not None and saved.updated_at > 0
        assert demo_project.updated_at is None
        assert json.loads(path.read_text(encoding="utf-8"))["updatedAt"] == saved.updated_at

    def test_load_saved(self, demo_project, tmp_path):
        path = tmp_path / "lesson.json"
        saved = save_project(demo_project, path)

        loaded = load_project(path)

        assert to_document(loaded) == to_document(saved)

    def test_load_invalid_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{}", encoding="utf-8")

        with pytest.raises(InvalidDocumentError):
            load_project(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_project(tmp_path / "absent.json")


def test_project_json_filename():
    assert project_json_filename("Lesson 1: Demo") == "Lesson_1__Demo_project.json"
    assert project_json_filename("第一课") == "____project.json"
