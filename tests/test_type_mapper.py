"""
TypeMapper 單元測試：Figma 類型與文字對齊對照。
"""
import pytest
from figdroid.type_mapper import map_kind, map_alignment, view_class, is_text_kind


@pytest.mark.parametrize("raw, expected", [
    ("FRAME", "FrameLayout"),
    ("GROUP", "LinearLayout"),
    ("RECTANGLE", "View"),
    ("TEXT", "TextView"),
    ("ELLIPSE", "View"),
    ("VECTOR", "ImageView"),
    ("INSTANCE", "include"),
    ("COMPONENT", "include"),
    ("CANVAS", "ScrollView"),
    ("DOCUMENT", "ViewGroup"),
])
def test_known_kinds(raw, expected):
    assert map_kind(raw) == expected


def test_kind_is_case_insensitive():
    assert map_kind("frame") == "FrameLayout"
    assert map_kind("Text") == "TextView"


def test_unknown_kind_falls_back_to_view():
    assert map_kind("BOOLEAN_OPERATION") == "View"
    assert map_kind("") == "View"
    assert map_kind(None) == "View"


def test_xml_alignment():
    assert map_alignment("left", "xml") == "textStart"
    assert map_alignment("CENTER", "xml") == "center"
    assert map_alignment("Right", "xml") == "textEnd"
    assert map_alignment("justified", "xml") == "textStart"


def test_code_alignment_same_for_java_and_kotlin():
    for dialect in ("java", "kotlin"):
        assert map_alignment("center", dialect) == "View.TEXT_ALIGNMENT_CENTER"
        assert map_alignment("right", dialect) == "View.TEXT_ALIGNMENT_TEXT_END"


def test_unknown_alignment_defaults_to_start():
    assert map_alignment("diagonal", "xml") == "textStart"
    assert map_alignment(None, "java") == "View.TEXT_ALIGNMENT_TEXT_START"


def test_unknown_dialect_raises():
    with pytest.raises(ValueError):
        map_alignment("left", "swift")


def test_view_class_replaces_non_instantiable_kinds():
    assert view_class("include") == "FrameLayout"
    assert view_class("ViewGroup") == "FrameLayout"
    assert view_class("TextView") == "TextView"


def test_is_text_kind():
    assert is_text_kind("TextView")
    assert not is_text_kind("View")
