"""
Per-template custom column registry.

A template owns an ordered list of column names; the values live in each
bound asset's `customFields`, keyed by column name. Renames and deletions
therefore migrate values across every asset of every segment bound to
the template. Reordering only touches the list.

The reserved keys `note` and `selected_types` can never become columns.
"""

from typing import Iterator, List

from scriptmaster.core.constants import is_reserved_field
from scriptmaster.core.exceptions import ReservedColumnNameError
from scriptmaster.models.script import Asset, Project, Template


def _bound_assets(project: Project, template_id: str) -> Iterator[Asset]:
    for segment in project.segments_for_template(template_id):
        yield from segment.assets


def _refuse_reserved(name: str) -> None:
    if is_reserved_field(name):
        raise ReservedColumnNameError(name)


def add_column(project: Project, template_id: str, name: str) -> bool:
    """
    Append a column. Empty names and duplicates are silent no-ops.

    Raises:
        ReservedColumnNameError: `name` is a reserved custom-field key
    """
    name = (name or "").strip()
    _refuse_reserved(name)
    template = project.find_template(template_id)
    if template is None or not name or name in template.custom_columns:
        return False
    template.custom_columns.append(name)
    return True


def rename_column(project: Project, template_id: str, old: str, new: str) -> bool:
    """
    Rename a column and migrate `customFields[old] -> customFields[new]`.

    Empty new names, duplicates and unknown columns are silent no-ops.
    Migrated values keep their position in each mapping; a leftover value
    already stored under `new` is dropped.

    Raises:
        ReservedColumnNameError: `new` is a reserved custom-field key
    """
    new = (new or "").strip()
    _refuse_reserved(new)
    template = project.find_template(template_id)
    if template is None or not new or old not in template.custom_columns:
        return False
    if new == old:
        return False
    if new in template.custom_columns:
        return False

    template.custom_columns[template.custom_columns.index(old)] = new
    for asset in _bound_assets(project, template_id):
        if old not in asset.custom_fields and new not in asset.custom_fields:
            continue
        # a leftover key under the new name never outlives the migrated value
        asset.custom_fields = {
            (new if key == old else key): value
            for key, value in asset.custom_fields.items()
            if key != new
        }
    return True


def delete_column(project: Project, template_id: str, name: str) -> bool:
    """Remove a column and erase its values from every bound asset."""
    template = project.find_template(template_id)
    if template is None or name not in template.custom_columns:
        return False
    template.custom_columns = [c for c in template.custom_columns if c != name]
    for asset in _bound_assets(project, template_id):
        asset.custom_fields.pop(name, None)
    return True


def move_column(project: Project, template_id: str, name: str, to_index: int) -> bool:
    """Move one column to a new position (clamped to the list bounds)."""
    template = project.find_template(template_id)
    if template is None or name not in template.custom_columns:
        return False
    columns = list(template.custom_columns)
    columns.remove(name)
    to_index = max(0, min(to_index, len(columns)))
    columns.insert(to_index, name)
    template.custom_columns = columns
    return True


def reorder_columns(project: Project, template_id: str, order: List[str]) -> bool:
    """
    Replace the column order.

    `order` must be a permutation of the current columns; anything else is
    ignored.
    """
    template = project.find_template(template_id)
    if template is None:
        return False
    if sorted(order) != sorted(template.custom_columns) or len(set(order)) != len(order):
        return False
    template.custom_columns = list(order)
    return True


def visible_columns(template: Template) -> List[str]:
    """Columns as shown to editors (reserved keys never listed)."""
    return [c for c in template.custom_columns if not is_reserved_field(c)]
