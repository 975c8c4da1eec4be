"""
Local edits on a single asset or extra.

These never cross entity boundaries. They exist so the type/format rules
hold no matter who edits an item:

- selected formats are always a subset of the formats permitted by the
  current type, and changing the type clears them;
- the `selected_types` multi-selection and the primary type agree
  (primary = first recognized label, otherwise the previous primary).

All functions mutate the item they are given; callers that need atomic
project transitions go through the propagator.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from scriptmaster.core.constants import (
    AD_HOC_ASSET_NAME,
    NOTE_KEY,
    SELECTED_TYPES_KEY,
    SELECTED_TYPES_SEPARATOR,
)
from scriptmaster.core.exceptions import InvalidDocumentError
from scriptmaster.models.script import (
    Asset,
    AssetType,
    Extra,
    new_asset,
    permitted_formats,
)

Item = Union[Asset, Extra]

# Fields a caller may set through update_asset/update_extra; identity, type,
# formats and custom fields have dedicated functions.
ASSET_EDITABLE_FIELDS = frozenset({
    "name", "description", "dimensions", "format", "file_size",
    "upload_instructions", "status", "enabled", "section_id",
})
EXTRA_EDITABLE_FIELDS = frozenset({"content", "dimensions", "file_size", "collapsed", "enabled"})


def _current_type(item: Item, fallback: Optional[AssetType] = None) -> Optional[AssetType]:
    return item.type if item.type is not None else fallback


def change_type(item: Item, new_type: AssetType) -> None:
    """Set the primary type; the formats list is reset."""
    item.type = AssetType(new_type)
    item.formats = []
    if isinstance(item, Asset):
        item.format = ""


def set_formats(item: Item, formats: Iterable[str], fallback_type: Optional[AssetType] = None) -> List[str]:
    """
    Select formats, keeping only those permitted by the item's type.

    Order follows the input; duplicates are dropped. Extras without a type
    of their own are checked against `fallback_type` (their asset's type).
    """
    allowed = permitted_formats(_current_type(item, fallback_type))
    selected: List[str] = []
    for fmt in formats:
        if fmt in allowed and fmt not in selected:
            selected.append(fmt)
    item.formats = selected
    return selected


def toggle_format(item: Item, fmt: str, fallback_type: Optional[AssetType] = None) -> List[str]:
    """Add or remove a single format from the selection."""
    current = list(item.formats)
    if fmt in current:
        current.remove(fmt)
    else:
        current.append(fmt)
    return set_formats(item, current, fallback_type)


def set_selected_types(item: Item, labels: Iterable[str]) -> None:
    """
    Store a multi-type selection and keep the primary type consistent.

    The primary type becomes the first recognized label; if none is
    recognized the previous primary stays. Formats are cleared.
    """
    chosen: List[str] = []
    for label in labels:
        if label and label not in chosen:
            chosen.append(label)

    item.custom_fields[SELECTED_TYPES_KEY] = SELECTED_TYPES_SEPARATOR.join(chosen)
    primary = next(
        (recognized for recognized in map(AssetType.from_label, chosen) if recognized),
        None,
    )
    if primary is not None:
        item.type = primary
    item.formats = []


def toggle_selected_type(item: Item, label: str) -> None:
    current = item.selected_types
    if label in current:
        current.remove(label)
    else:
        current.append(label)
    set_selected_types(item, current)


def set_custom_field(item: Item, key: str, value: str) -> None:
    """Set one custom field. Use set_selected_types for the type selection."""
    if key == SELECTED_TYPES_KEY:
        set_selected_types(item, str(value).split(SELECTED_TYPES_SEPARATOR))
        return
    item.custom_fields[key] = value


def set_note(item: Item, value: str) -> None:
    item.custom_fields[NOTE_KEY] = value


def _coerce_type(value: Any) -> AssetType:
    asset_type = AssetType.from_label(value)
    if asset_type is None:
        raise InvalidDocumentError(f"Unknown asset type {value!r}", errors=["type"])
    return asset_type


def _assign(item: Item, key: str, value: Any) -> None:
    """Set one field; values the field type rejects raise InvalidDocumentError."""
    try:
        setattr(item, key, value)
    except ValidationError as exc:
        raise InvalidDocumentError(
            f"Invalid value for {key!r}",
            errors=[f"{key}: {error['msg']}" for error in exc.errors()],
        ) from exc


def update_asset(asset: Asset, changes: Dict[str, Any]) -> None:
    """
    Apply plain field edits to an asset.

    `type`, `formats` and the custom fields are routed through the
    rule-keeping functions above; unknown keys are ignored.

    Raises:
        InvalidDocumentError: a value does not fit its field
    """
    if changes.get("type") is not None:
        new_type = _coerce_type(changes["type"])
        if new_type != asset.type:
            change_type(asset, new_type)
    for key, value in changes.items():
        if key in ASSET_EDITABLE_FIELDS:
            _assign(asset, key, value)
    if "formats" in changes:
        set_formats(asset, changes["formats"] or [])
    for key, value in (changes.get("custom_fields") or {}).items():
        set_custom_field(asset, key, value)


def update_extra(asset: Asset, index: int, changes: Dict[str, Any]) -> None:
    """Apply plain field edits to the extra at `index`; out of range is a no-op."""
    if not 0 <= index < len(asset.extras):
        return
    extra = asset.extras[index]
    if changes.get("type") is not None:
        new_type = _coerce_type(changes["type"])
        if new_type != extra.type:
            change_type(extra, new_type)
    for key, value in changes.items():
        if key in EXTRA_EDITABLE_FIELDS:
            _assign(extra, key, value)
    if "formats" in changes:
        set_formats(extra, changes["formats"] or [], fallback_type=asset.type)
    for key, value in (changes.get("custom_fields") or {}).items():
        set_custom_field(extra, key, value)


def add_extra(asset: Asset) -> Extra:
    """Append a new, expanded extra seeded with the asset's description and type."""
    extra = Extra(
        content=asset.description or "",
        type=asset.type,
        formats=[],
        dimensions="",
        file_size="",
        collapsed=False,
    )
    asset.extras.append(extra)
    return extra


def duplicate_extra(asset: Asset, index: int) -> Optional[Extra]:
    """Insert a collapsed copy right after the extra at `index`."""
    if not 0 <= index < len(asset.extras):
        return None
    source = asset.extras[index]
    duplicate = Extra(
        content=source.content or "",
        type=source.type or asset.type,
        formats=[],
        dimensions="",
        file_size="",
        collapsed=True,
        custom_fields=dict(source.custom_fields),
    )
    asset.extras.insert(index + 1, duplicate)
    return duplicate


def remove_extra(asset: Asset, index: int) -> None:
    if 0 <= index < len(asset.extras):
        del asset.extras[index]


def copy_previous_row(assets: List[Asset], asset_id: str) -> None:
    """
    Copy content fields from the preceding asset onto `asset_id`.

    Name, identity, status and enabled stay; the first asset is left alone.
    """
    index = next((i for i, a in enumerate(assets) if a.id == asset_id), -1)
    if index <= 0:
        return
    previous, target = assets[index - 1], assets[index]
    target.description = previous.description or ""
    target.type = previous.type
    target.formats = list(previous.formats)
    target.format = previous.format or ""
    target.dimensions = previous.dimensions or ""
    target.file_size = previous.file_size or ""
    target.custom_fields = dict(previous.custom_fields)
    target.extras = [extra.model_copy(deep=True) for extra in previous.extras]


def ad_hoc_asset() -> Asset:
    """A blank COMPONENT asset appended outside of any template."""
    return new_asset(
        name=AD_HOC_ASSET_NAME,
        type=AssetType.COMPONENT,
        description="",
        dimensions="",
        format="",
        upload_instructions="",
        file_size="",
        formats=[],
        extras=[],
    )
