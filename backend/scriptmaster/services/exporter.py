"""
Tabular export of a project to a spreadsheet-readable HTML artifact.

Spreadsheet tools open an HTML table document served as
`application/vnd.ms-excel` (extension `.xls`) and keep row spans, so the
whole script goes out as one self-contained HTML string:

    preamble (inline CSS) -> project title -> per segment:
        header table (index, title, template name, thumbnail)
        body table (TG note row, one row per asset + one per extra)

Skipped: segments without a template binding or without assets, assets
with `enabled == false`, extras with `enabled == false`.
"""

import html
import re
from typing import List, Optional

from scriptmaster.core.constants import (
    EMPTY_CELL,
    EXPORT_EXTENSION,
    EXPORT_FILENAME_SUFFIX,
    EXPORT_MIME_TYPE,
    NO_FORMAT_SELECTED,
)
from scriptmaster.core.exceptions import EmptyProjectError
from scriptmaster.core.security import sanitize_filename
from scriptmaster.models.script import Asset, Extra, Project, Segment, Template

from .markup import SOFT_BREAK, render_markup

__all__ = [
    "EXPORT_MIME_TYPE",
    "BODY_COLUMNS",
    "export_project",
    "export_filename",
    "exportable_segments",
    "is_exportable",
]

# (header label, width in px; None = fill)
BODY_COLUMNS = (
    ("#", 50),
    ("组件名称", 150),
    ("分项/分项内容", 160),
    ("类型", 120),
    ("格式", 160),
    ("尺寸/规格", 140),
    ("文件大小", 120),
    ("内容描述 / 制作说明", None),
)

_STYLE = """
      body { font-family: 'Microsoft YaHei', sans-serif; }
      table { border-collapse: collapse; width: 100%; margin-bottom: 30px; }
      th, td { border: 1px solid #000; padding: 10px; vertical-align: top; text-align: left; }
      th { background-color: #f3f4f6; font-weight: bold; }
      h2 { color: #333; }
      .extra-row td { background-color: #f9fafb; }
      .group-cell { background: #f6f8ff; border-left: 2px solid #000; font-weight: 700; text-align: center; }
      .tg-label { background: #f9fafb; font-size: 12px; font-weight: 700; text-align: center; width: 40px; }
      .tg-note { background: #f9fafb; font-size: 12px; white-space: normal; line-height: 1.4; }
      .seg-head { width: 100%; border-collapse: collapse; margin: 6px 0 8px; }
      .seg-head td { vertical-align: middle; border: none; }
      .seg-title { font-weight: 700; font-size: 14px; }
      .seg-template { font-size: 0.8em; color: #666; font-weight: normal; }
      .seg-thumb { width: 160px; }
      .seg-thumb img { display: block; max-width: 140px; max-height: 90px; object-fit: contain; border: 1px solid #000; border-radius: 4px; }
"""

_NEWLINE = re.compile(r"\r?\n")


def _text(value: Optional[str]) -> str:
    """Escape a plain-text field; empty becomes the empty-cell marker."""
    return html.escape(value, quote=False) if value else EMPTY_CELL


def _rich(value: Optional[str]) -> str:
    """Render a markup field; empty becomes the empty-cell marker."""
    return render_markup(value) or EMPTY_CELL


def is_exportable(segment: Segment) -> bool:
    return bool(segment.template_id) and len(segment.assets) > 0


def exportable_segments(project: Project) -> List[Segment]:
    return [segment for segment in project.segments if is_exportable(segment)]


def export_filename(title: str) -> str:
    """`<title>_完整脚本.xls`, with the title made safe for a file name."""
    return f"{sanitize_filename(title)}{EXPORT_FILENAME_SUFFIX}{EXPORT_EXTENSION}"


def _type_cell(item, fallback: Optional[str] = None) -> str:
    selected = item.selected_types
    if selected:
        return html.escape(", ".join(selected), quote=False)
    if item.type is not None:
        return html.escape(item.type.value, quote=False)
    return _text(fallback)


def _formats_cell(formats: List[str], primary: Optional[str] = None, empty: str = EMPTY_CELL) -> str:
    if formats:
        return html.escape(", ".join(formats), quote=False)
    return _text(primary) if primary else empty


def _custom_fields_text(item) -> str:
    """`key：value` pairs joined by `；`, in insertion order, blanks dropped."""
    pairs = []
    for key, value in item.visible_custom_fields().items():
        if not value:
            continue
        value = _NEWLINE.sub(SOFT_BREAK, html.escape(value, quote=False))
        pairs.append(f"{html.escape(key, quote=False)}：{value}")
    return "；".join(pairs)


def description_cell(item) -> str:
    """Rendered note and custom fields, joined by soft breaks."""
    parts = []
    note = render_markup(item.note)
    if note:
        parts.append(note)
    fields = _custom_fields_text(item)
    if fields:
        parts.append(fields)
    return SOFT_BREAK.join(parts) if parts else EMPTY_CELL


def _enabled_extras(asset: Asset) -> List[Extra]:
    return [extra for extra in asset.extras if extra.enabled is not False]


def _asset_rows(asset: Asset, number: int) -> List[str]:
    extras = _enabled_extras(asset)
    span = 1 + len(extras)
    rows = [
        "<tr>"
        f'<td class="group-cell" rowspan="{span}">{number}</td>'
        f'<td rowspan="{span}">{_text(asset.name)}</td>'
        f"<td>{_rich(asset.description)}</td>"
        f"<td>{_type_cell(asset)}</td>"
        f"<td>{_formats_cell(asset.formats, asset.format)}</td>"
        f"<td>{_text(asset.dimensions)}</td>"
        f"<td>{_text(asset.file_size)}</td>"
        f"<td>{description_cell(asset)}</td>"
        "</tr>"
    ]
    for extra in extras:
        rows.append(
            '<tr class="extra-row">'
            f"<td>{_rich(extra.content)}</td>"
            f"<td>{_type_cell(extra, fallback=asset.type.value)}</td>"
            f"<td>{_formats_cell(extra.formats, empty=NO_FORMAT_SELECTED)}</td>"
            f"<td>{_text(extra.dimensions)}</td>"
            f"<td>{_text(extra.file_size)}</td>"
            f"<td>{description_cell(extra)}</td>"
            "</tr>"
        )
    return rows


def _segment_header(segment: Segment, index: int, template: Optional[Template]) -> str:
    thumb = ""
    if template is not None and template.thumbnail:
        thumb = (
            f'<img src="{html.escape(template.thumbnail, quote=True)}" alt="模板示意图" '
            'width="140" height="90" style="border:1px solid #000; border-radius:4px;" />'
        )
    return (
        '<table class="seg-head"><tr>'
        f'<td class="seg-title">环节 {index}: {html.escape(segment.title, quote=False)} '
        f'<span class="seg-template">(模版: {html.escape(segment.template_name, quote=False)})</span></td>'
        f'<td class="seg-thumb" width="170" align="right" valign="middle">{thumb}</td>'
        "</tr></table>"
    )


def _segment_body(segment: Segment) -> str:
    head = "".join(
        f'<th style="width: {width}px;">{label}</th>' if width else f"<th>{label}</th>"
        for label, width in BODY_COLUMNS
    )
    rows = []
    if segment.note:
        rows.append(
            "<tr>"
            '<td class="tg-label">TG</td>'
            f'<td class="tg-note" colspan="{len(BODY_COLUMNS) - 1}">{render_markup(segment.note)}</td>'
            "</tr>"
        )
    for number, asset in enumerate(segment.assets, start=1):
        if asset.enabled is False:
            continue
        rows.extend(_asset_rows(asset, number))
    return (
        "<table>"
        f"<thead><tr>{head}</tr></thead>"
        f"<tbody>{''.join(rows)}</tbody>"
        "</table>"
    )


def export_project(project: Project) -> str:
    """
    Render a project as a single spreadsheet-readable HTML document.

    Segment and row numbers follow list positions, so they stay stable
    when an entry is skipped.

    Raises:
        EmptyProjectError: no segment survives the skip rules
    """
    if not exportable_segments(project):
        raise EmptyProjectError(project.id)

    parts = [
        "<html><head>",
        '<meta charset="utf-8">',
        f"<title>{html.escape(project.title, quote=False)}</title>",
        f"<style>{_STYLE}</style>",
        "</head><body>",
        f"<h2>{html.escape(project.title, quote=False)} - 课程脚本单</h2>",
        "<hr/>",
    ]
    for index, segment in enumerate(project.segments, start=1):
        if not is_exportable(segment):
            continue
        template = project.find_template(segment.template_id)
        parts.append(_segment_header(segment, index, template))
        parts.append(_segment_body(segment))
    parts.append("</body></html>")
    return "\n".join(parts)
