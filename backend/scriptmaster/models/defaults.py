"""
Default template and course-preset library.

Seeds a fresh workspace with the stock lesson building blocks. Identifiers
are fixed so the default course preset can reference the default templates.
"""

from typing import List

from .script import (
    Asset,
    AssetStatus,
    AssetType,
    CoursePreset,
    Project,
    Step,
    Template,
)

DEFAULT_PROJECT_ID = "course-1"
DEFAULT_PROJECT_TITLE = "Lesson 1: Demo Course"


def _preset(id: str, name: str, type: AssetType, description: str, format: str,
            dimensions: str, upload_instructions: str) -> Asset:
    return Asset(
        id=id,
        name=name,
        type=type,
        description=description,
        format=format,
        dimensions=dimensions,
        upload_instructions=upload_instructions,
        status=AssetStatus.PENDING,
    )


def default_templates() -> List[Template]:
    """Return fresh copies of the stock templates."""
    return [
        Template(
            id="t1",
            name="互动场景 (Interactive Scene)",
            presets=[
                _preset("p1", "背景图片", AssetType.IMAGE, "场景大背景", "PNG", "1920x1080", "assets/bg/"),
                _preset("p2", "标题音频", AssetType.AUDIO, "页面标题朗读", "MP3", "-", "assets/audio/"),
                _preset("p3", "下一步按钮", AssetType.COMPONENT, "通用导航", "React", "-", "components/NavBtn"),
            ],
        ),
        Template(
            id="t2",
            name="视频教学 (Video Lesson)",
            presets=[
                _preset("v1", "教学视频", AssetType.VIDEO, "核心讲解视频", "MP4", "1920x1080", "assets/video/"),
                _preset("v2", "字幕", AssetType.COMPONENT, "SRT文件", "SRT", "-", "assets/subs/"),
            ],
        ),
        Template(
            id="t3",
            name="单词卡片 (Flashcards)",
            presets=[
                _preset("f1", "卡片图片", AssetType.IMAGE, "单词对应的图片", "PNG", "800x600", "assets/cards/"),
                _preset("f2", "单词发音", AssetType.AUDIO, "单词朗读", "MP3", "-", "assets/audio/"),
            ],
        ),
    ]


def default_course_presets() -> List[CoursePreset]:
    """Return fresh copies of the stock lesson flows."""
    return [
        CoursePreset(
            id="cp1",
            name="标准绘本课 (Standard Story)",
            steps=[
                Step(id="s1", title="01. Warm-up", template_id="t2"),
                Step(id="s2", title="02. Story Page 1", template_id="t1"),
                Step(id="s3", title="03. Story Page 2", template_id="t1"),
                Step(id="s4", title="04. Wrap-up", template_id="t2"),
            ],
        )
    ]


def default_project() -> Project:
    """The starting document of a new workspace: stock library, no segments."""
    return Project(
        id=DEFAULT_PROJECT_ID,
        title=DEFAULT_PROJECT_TITLE,
        templates=default_templates(),
        course_presets=default_course_presets(),
        segments=[],
    )
