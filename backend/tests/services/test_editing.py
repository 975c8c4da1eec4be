"""
Tests for single-item edits (type/format rules, extras, row copy)
"""

import pytest

from scriptmaster.core.exceptions import InvalidDocumentError
from scriptmaster.models import Asset, AssetStatus, AssetType, Extra
from scriptmaster.services import editing


def _asset(**fields) -> Asset:
    fields.setdefault("id", "a1")
    fields.setdefault("name", "Background")
    return Asset(**fields)


class TestTypeAndFormats:
    """Formats stay within the type's permitted set"""

    def test_change_type_resets_formats(self):
        asset = _asset(type=AssetType.IMAGE, formats=["PNG"], format="PNG")

        editing.change_type(asset, AssetType.AUDIO)

        assert asset.type is AssetType.AUDIO
        assert asset.formats == []
        assert asset.format == ""

    def test_set_formats_filters_and_dedupes(self):
        asset = _asset(type=AssetType.IMAGE)

        selected = editing.set_formats(asset, ["PNG", "MP3", "PNG", "JPG"])

        assert selected == ["PNG", "JPG"]
        assert asset.formats == ["PNG", "JPG"]

    def test_extra_without_type_uses_fallback(self):
        extra = Extra()

        assert editing.set_formats(extra, ["MP3"], fallback_type=AssetType.AUDIO) == ["MP3"]
        assert editing.set_formats(extra, ["MP3"]) == []

    def test_toggle_format(self):
        asset = _asset(type=AssetType.VIDEO)

        editing.toggle_format(asset, "MP4")
        editing.toggle_format(asset, "MOV")
        editing.toggle_format(asset, "MP4")

        assert asset.formats == ["MOV"]

    def test_toggle_forbidden_format_ignored(self):
        asset = _asset(type=AssetType.AUDIO)
        editing.toggle_format(asset, "PNG")
        assert asset.formats == []


class TestSelectedTypes:
    """Multi-type selection and the primary type agree"""

    def test_primary_is_first_recognized(self):
        asset = _asset(type=AssetType.DEFAULT, formats=["未明确规定"])

        editing.set_selected_types(asset, ["Sticker", "音频 (Audio)", "图片 (Image)"])

        assert asset.type is AssetType.AUDIO
        assert asset.custom_fields["selected_types"] == "Sticker|音频 (Audio)|图片 (Image)"
        assert asset.formats == []

    def test_unrecognized_only_keeps_primary(self):
        asset = _asset(type=AssetType.VIDEO)
        editing.set_selected_types(asset, ["Sticker"])
        assert asset.type is AssetType.VIDEO

    def test_toggle_selected_type(self):
        asset = _asset()

        editing.toggle_selected_type(asset, "图片 (Image)")
        editing.toggle_selected_type(asset, "视频 (Video)")
        editing.toggle_selected_type(asset, "图片 (Image)")

        assert asset.selected_types == ["视频 (Video)"]
        assert asset.type is AssetType.VIDEO

    def test_custom_field_routes_selected_types(self):
        asset = _asset()
        editing.set_custom_field(asset, "selected_types", "动画 (Animation)")
        assert asset.type is AssetType.ANIMATION


class TestUpdateAsset:
    def test_plain_fields(self):
        asset = _asset()

        editing.update_asset(asset, {"description": "sky", "dimensions": "1920x1080", "id": "hijack"})

        assert asset.description == "sky"
        assert asset.dimensions == "1920x1080"
        assert asset.id == "a1"

    def test_type_and_formats_together(self):
        asset = _asset(type=AssetType.DEFAULT)

        editing.update_asset(asset, {"type": AssetType.IMAGE, "formats": ["PNG", "MP3"]})

        assert asset.type is AssetType.IMAGE
        assert asset.formats == ["PNG"]

    def test_same_type_keeps_formats(self):
        asset = _asset(type=AssetType.IMAGE, formats=["PNG"])
        editing.update_asset(asset, {"type": AssetType.IMAGE})
        assert asset.formats == ["PNG"]

    def test_custom_fields(self):
        asset = _asset(custom_fields={"Remark": "old"})

        editing.update_asset(asset, {"custom_fields": {"Remark": "new", "note": "n"}})

        assert asset.custom_fields["Remark"] == "new"
        assert asset.note == "n"

    def test_status_coerced_from_label(self):
        asset = _asset()
        editing.update_asset(asset, {"status": "READY", "enabled": "no"})

        assert asset.status is AssetStatus.READY
        assert asset.enabled is False

    def test_invalid_status_rejected(self):
        asset = _asset()

        with pytest.raises(InvalidDocumentError) as exc_info:
            editing.update_asset(asset, {"status": "DONE"})

        assert asset.status is AssetStatus.PENDING
        assert exc_info.value.errors[0].startswith("status:")

    def test_unknown_type_rejected(self):
        asset = _asset(type=AssetType.IMAGE, formats=["PNG"])

        with pytest.raises(InvalidDocumentError):
            editing.update_asset(asset, {"type": "Sticker"})

        assert asset.formats == ["PNG"]

    def test_invalid_extra_value_rejected(self):
        asset = _asset(extras=[Extra(content="x")])

        with pytest.raises(InvalidDocumentError):
            editing.update_extra(asset, 0, {"collapsed": "sometimes"})

        assert asset.extras[0].collapsed is None


class TestExtras:
    def test_add_extra_seeded_from_asset(self):
        asset = _asset(type=AssetType.IMAGE, description="sky")

        extra = editing.add_extra(asset)

        assert asset.extras == [extra]
        assert extra.content == "sky"
        assert extra.type is AssetType.IMAGE
        assert extra.collapsed is False

    def test_duplicate_extra_inserted_after_source(self):
        asset = _asset(extras=[Extra(content="a", formats=["PNG"]), Extra(content="b")])

        duplicate = editing.duplicate_extra(asset, 0)

        assert [e.content for e in asset.extras] == ["a", "a", "b"]
        assert duplicate.collapsed is True
        assert duplicate.formats == []

    def test_duplicate_out_of_range(self):
        asset = _asset()
        assert editing.duplicate_extra(asset, 3) is None

    def test_update_extra_formats_use_asset_type(self):
        asset = _asset(type=AssetType.AUDIO, extras=[Extra(content="x")])

        editing.update_extra(asset, 0, {"content": "y", "formats": ["MP3", "PNG"]})

        assert asset.extras[0].content == "y"
        assert asset.extras[0].formats == ["MP3"]

    def test_update_extra_out_of_range_is_noop(self):
        asset = _asset(extras=[Extra(content="x")])
        editing.update_extra(asset, 5, {"content": "y"})
        assert asset.extras[0].content == "x"

    def test_remove_extra(self):
        asset = _asset(extras=[Extra(content="a"), Extra(content="b")])

        editing.remove_extra(asset, 0)
        editing.remove_extra(asset, 9)

        assert [e.content for e in asset.extras] == ["b"]


class TestCopyPreviousRow:
    def test_copies_content_but_not_identity(self):
        previous = _asset(
            id="a1",
            description="sky",
            type=AssetType.IMAGE,
            formats=["PNG"],
            custom_fields={"Remark": "r"},
            extras=[Extra(content="x")],
        )
        target = _asset(id="a2", name="Title", status=AssetStatus.READY)
        assets = [previous, target]

        editing.copy_previous_row(assets, "a2")

        assert target.name == "Title"
        assert target.id == "a2"
        assert target.status is AssetStatus.READY
        assert target.description == "sky"
        assert target.formats == ["PNG"]
        assert target.custom_fields == {"Remark": "r"}
        assert target.extras[0] is not previous.extras[0]

    def test_first_row_unchanged(self):
        first = _asset(id="a1", description="keep")
        editing.copy_previous_row([first], "a1")
        assert first.description == "keep"


def test_ad_hoc_asset():
    asset = editing.ad_hoc_asset()

    assert asset.name == "临时组件"
    assert asset.type is AssetType.COMPONENT
    assert asset.status is AssetStatus.PENDING
    assert asset.enabled is True


def test_set_note_keeps_other_fields():
    extra = Extra(custom_fields={"Remark": "r"})

    editing.set_note(extra, "Slow down")

    assert extra.note == "Slow down"
    assert extra.custom_fields["Remark"] == "r"
