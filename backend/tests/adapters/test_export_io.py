"""
Tests for the export artifact writer
"""

import pytest

from scriptmaster.adapters.export_io import write_export
from scriptmaster.core.exceptions import EmptyProjectError
from scriptmaster.services.propagator import LoadCoursePreset, dispatch


def test_write_export(demo_project, tmp_path):
    project = dispatch(demo_project, LoadCoursePreset("cp1"))

    path = write_export(project, tmp_path / "out")

    assert path == tmp_path / "out" / "Lesson 1 Demo Course_完整脚本.xls"
    content = path.read_text(encoding="utf-8")
    assert "<h2>Lesson 1: Demo Course - 课程脚本单</h2>" in content
    assert content.count("环节 ") == 4


def test_empty_project_writes_nothing(demo_project, tmp_path):
    with pytest.raises(EmptyProjectError):
        write_export(demo_project, tmp_path)

    assert list(tmp_path.iterdir()) == []
