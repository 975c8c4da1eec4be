"""
Shared constants used across the application.

Document-format strings (type labels, reserved keys, placeholder titles)
live here because they must round-trip verbatim.
"""

from typing import FrozenSet

# Reserved custom-field keys
NOTE_KEY = "note"
SELECTED_TYPES_KEY = "selected_types"
RESERVED_FIELD_KEYS: FrozenSet[str] = frozenset({NOTE_KEY, SELECTED_TYPES_KEY})

# Separator for the multi-type selection stored under SELECTED_TYPES_KEY
SELECTED_TYPES_SEPARATOR = "|"

# Placeholder titles and default names
NEW_SEGMENT_TITLE = "新环节 (New Segment)"
NEW_STEP_TITLE = "新环节"
NEW_TEMPLATE_NAME = "新模版 (New Template)"
NEW_COURSE_PRESET_NAME = "新课型 (New Course Type)"
AD_HOC_ASSET_NAME = "临时组件"

# "Not explicitly specified" format option, allowed for every type
UNSPECIFIED_FORMAT = "未明确规定"

# Export artifact
EXPORT_MIME_TYPE = "application/vnd.ms-excel"
EXPORT_EXTENSION = ".xls"
EXPORT_FILENAME_SUFFIX = "_完整脚本"
EMPTY_CELL = "-"
NO_FORMAT_SELECTED = "未选择"


def is_reserved_field(key: str) -> bool:
    """Check whether a custom-field key is reserved (never a custom column)."""
    return key in RESERVED_FIELD_KEYS
