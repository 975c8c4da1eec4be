"""
Follow-up lessons built from an existing project.
"""

import re

from scriptmaster.models.script import Project, new_id

_LESSON_NUMBER = re.compile(r"Lesson\s*(\d+)", re.IGNORECASE)


def next_lesson_title(title: str) -> str:
    """`Lesson 3: Colors` -> `Lesson 4: Colors`; otherwise append ` - Next Lesson`."""
    match = _LESSON_NUMBER.search(title)
    if match is None:
        return f"{title} - Next Lesson"
    number = int(match.group(1)) + 1
    return _LESSON_NUMBER.sub(f"Lesson {number}", title, count=1)


def create_next_lesson(project: Project) -> Project:
    """
    Copy a project as the next lesson in the series.

    The copy gets a fresh id and the next lesson title; templates, course
    presets and segments are carried over, each segment under a fresh id.
    """
    lesson = project.model_copy(deep=True)
    lesson.id = new_id()
    lesson.title = next_lesson_title(project.title)
    lesson.updated_at = None
    for segment in lesson.segments:
        segment.id = new_id()
    return lesson
