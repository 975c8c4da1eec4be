"""
Filename safety for artifacts written or offered for download.

Titles come straight from user-edited documents and are embedded in file
names (`<title>_完整脚本.xls`, `<title>_project.json`), so they are reduced
to a single safe path component before use.
"""

import os
import re

# Characters rejected by at least one common file system
_DANGEROUS_CHARS = '<>:"/\\|?*'
_FALLBACK_NAME = "untitled"


def sanitize_filename(filename: str) -> str:
    """
    Reduce a user supplied name to a single safe file-name component.

    Unlike upload sanitizing, non-ASCII text is kept: course titles are
    routinely Chinese and must survive into the exported file name.

    Removes:
    - Directory components and separators (/, \\)
    - Null bytes and control characters
    - Characters illegal on Windows file systems
    - Leading dots (hidden files, relative paths)

    Example:
        >>> sanitize_filename("../Unit 1/Lesson 2")
        "Unit 1Lesson 2"
        >>> sanitize_filename("第一课: 问候")
        "第一课 问候"
    """
    name = str(filename or "")
    name = name.replace("\x00", "")
    name = "".join(ch for ch in name if 31 < ord(ch) != 127)
    for char in _DANGEROUS_CHARS:
        name = name.replace(char, "")
    name = re.sub(r"\s+", " ", name).strip()
    name = name.lstrip(".").strip()
    # Most file systems limit a component to 255 bytes; leave room for suffixes
    while len(name.encode("utf-8")) > 200:
        name = name[:-1]
    if not name or name.replace(".", "") == "":
        return _FALLBACK_NAME
    return os.path.basename(name)


def ascii_slug(title: str) -> str:
    """Replace every character outside [A-Za-z0-9-_] with an underscore."""
    return re.sub(r"[^a-zA-Z0-9\-_]", "_", str(title or ""))
