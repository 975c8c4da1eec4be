import logging

import pytest

from scriptmaster.core.logging import clear_context
from scriptmaster.models import (
    Asset,
    AssetType,
    Project,
    Segment,
    Template,
    default_project,
)


@pytest.fixture(autouse=True)
def reset_log_context():
    """Correlation IDs are context variables; never leak them between tests."""
    clear_context()
    yield
    clear_context()


@pytest.fixture
def demo_project() -> Project:
    """The default workspace: three templates, one course preset, no segments."""
    return default_project()


@pytest.fixture
def single_template_project() -> Project:
    """Template t1 with one IMAGE preset; no segments."""
    template = Template(
        id="t1",
        name="Scene",
        presets=[Asset(id="p1", name="Background", type=AssetType.IMAGE, format="PNG")],
    )
    return Project(id="proj-1", title="Unit 1", templates=[template], course_presets=[], segments=[])


@pytest.fixture
def bound_segment_project(single_template_project) -> Project:
    """single_template_project plus one segment built from t1."""
    project = single_template_project
    project.segments.append(
        Segment(
            id="seg-1",
            title="Warm-up",
            template_id="t1",
            template_name="Scene",
            assets=[Asset(id="a1", name="Background", type=AssetType.IMAGE, description="sky")],
        )
    )
    return project


@pytest.fixture(autouse=True)
def restore_root_logging():
    """setup_logging() replaces root handlers; put the originals back."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
