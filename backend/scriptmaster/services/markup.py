"""
Inline markup renderer for the export artifact.

A deliberately small, line-oriented dialect:

    ---            horizontal rule
    > quote        block quote (consecutive lines merge)
    - item         unordered list (consecutive lines merge)
    1. item        ordered list (consecutive lines merge)

Plain lines get inline substitutions, applied in this order:
**bold**, *italic*, ~~strike~~, `code`, [label](http(s)://url).

Existing HTML is passed through untouched (notes may come from a rich-text
editor). Only the exporter uses this; never feed the result back into
editable content.
"""

import re
from typing import Any, Callable, List

_HR = re.compile(r"^\s*---\s*$")
_QUOTE = re.compile(r"^\s*> ?")
_UL = re.compile(r"^\s*-\s+")
_OL = re.compile(r"^\s*\d+\.\s+")

_INLINE_RULES = (
    (re.compile(r"\*\*([^*]+)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*([^*]+)\*"), r"<em>\1</em>"),
    (re.compile(r"~~([^~]+)~~"), r"<del>\1</del>"),
    (re.compile(r"`([^`]+)`"), r"<code>\1</code>"),
    (re.compile(r"\[([^\]]+)\]\((https?://[^)\s]+)\)"), r'<a href="\2" target="_blank">\1</a>'),
)

SOFT_BREAK = "<br/>"


def render_inline(line: str) -> str:
    """Apply the inline substitutions to a single line."""
    for pattern, replacement in _INLINE_RULES:
        line = pattern.sub(replacement, line)
    return line


def _collect(lines: List[str], start: int, pattern: re.Pattern) -> List[str]:
    """Consume the run of lines matching `pattern`, stripping the marker."""
    items = []
    i = start
    while i < len(lines) and pattern.match(lines[i]):
        items.append(pattern.sub("", lines[i], count=1))
        i += 1
    return items


def _list_block(tag: str) -> Callable[[List[str]], str]:
    def render(items: List[str]) -> str:
        return f"<{tag}>" + "".join(f"<li>{item}</li>" for item in items) + f"</{tag}>"
    return render


_BLOCKS = (
    (_QUOTE, lambda items: f"<blockquote>{SOFT_BREAK.join(items)}</blockquote>"),
    (_UL, _list_block("ul")),
    (_OL, _list_block("ol")),
)


def render_markup(text: Any) -> str:
    """
    Render the restricted markup dialect to an HTML fragment.

    Total: any input (including None) produces a string; never raises.

    Example:
        >>> render_markup("**bold** note")
        '<strong>bold</strong> note'
        >>> render_markup("- a\\n- b")
        '<ul><li>a</li><li>b</li></ul>'
    """
    source = "" if text is None else str(text)
    if not source:
        return ""

    lines = re.split(r"\r?\n", source)
    out: List[str] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if _HR.match(line):
            out.append("<hr/>")
            i += 1
            continue

        for pattern, render_block in _BLOCKS:
            if pattern.match(line):
                items = _collect(lines, i, pattern)
                out.append(render_block(items))
                i += len(items)
                break
        else:
            out.append(render_inline(line))
            i += 1

    return SOFT_BREAK.join(out)
