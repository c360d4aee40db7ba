"""
Generator 管線測試：一次正規化、三份輸出、寫檔。
"""
from unittest.mock import MagicMock

import pytest

from conftest import make_node, wrap_document
from figdroid.figma_reader import sample_document
from figdroid.generator import (
    ConversionResult,
    convert_document,
    fetch_document,
    generate_project,
    write_outputs,
)
from figdroid.naming_engine import NamingConfig
from figdroid.node_parser import InvalidDocument
from figdroid.view_generator import generate_view_code
from figdroid.xml_generator import EMPTY_LAYOUT, generate_xml


def test_convert_produces_three_outputs(login_document):
    result = convert_document(login_document)
    assert isinstance(result, ConversionResult)
    assert len(result.components) == 3
    assert result.root_count == 1
    assert result.xml == generate_xml(result.components)
    assert result.java == generate_view_code(result.components, "java")
    assert result.kotlin == generate_view_code(result.components, "kotlin")


def test_convert_is_idempotent(login_document):
    a = convert_document(login_document, "com.acme", "Screen")
    b = convert_document(login_document, "com.acme", "Screen")
    assert (a.xml, a.java, a.kotlin) == (b.xml, b.java, b.kotlin)


def test_convert_invalid_document():
    with pytest.raises(InvalidDocument):
        convert_document({"nodes": {}})


def test_convert_empty_document_gives_fallbacks():
    result = convert_document({"document": {"id": "0:0", "type": "DOCUMENT", "children": []}})
    assert result.components == []
    assert result.xml == EMPTY_LAYOUT
    assert "rootView" in result.java
    assert "rootView" in result.kotlin


def test_convert_reports_collisions():
    root = make_node("1:1", "FRAME", name="Card", children=[make_node("1:2", name="Card")])
    result = convert_document(wrap_document(root))
    assert [c.name for c in result.components] == ["card", "card_2"]
    assert result.collisions == [("1:2", "card", "card_2")]


def test_convert_reports_duplicate_ids():
    root = make_node("1:1", "FRAME", name="Card", children=[make_node("1:1", name="Label")])
    result = convert_document(wrap_document(root))
    assert [c.id for c in result.components] == ["1:1", "1:1_2"]
    assert result.duplicate_ids == [("1:1", "1:1_2")]
    assert result.java.count(".addView(") == 1


def test_convert_without_dedupe():
    root = make_node("1:1", "FRAME", name="Card", children=[make_node("1:2", name="Card")])
    result = convert_document(wrap_document(root), naming_config=NamingConfig(dedupe=False))
    assert [c.name for c in result.components] == ["card", "card"]
    assert result.collisions == []


def test_sample_document_converts():
    result = convert_document(sample_document())
    assert [c.id for c in result.components] == ["1:2", "1:3", "1:4", "1:5", "1:6"]
    assert result.java.count(".addView(") == 4
    assert 'android:text="Login"' in result.xml
    assert 'android:textStyle="bold"' in result.xml


# ─── write_outputs ───────────────────────────────────────────────────────────

def test_write_outputs_layout(tmp_path, login_document):
    result = convert_document(login_document, "com.acme.login", "LoginLayout")
    paths = write_outputs(result, str(tmp_path), "com.acme.login", "LoginLayout", "activity_login")
    assert paths["xml"] == tmp_path / "res" / "layout" / "activity_login.xml"
    assert paths["java"] == tmp_path / "java" / "com" / "acme" / "login" / "LoginLayout.java"
    assert paths["kotlin"] == tmp_path / "kotlin" / "com" / "acme" / "login" / "LoginLayout.kt"
    assert paths["xml"].read_text(encoding="utf-8") == result.xml
    assert paths["java"].read_text(encoding="utf-8") == result.java
    assert paths["kotlin"].read_text(encoding="utf-8") == result.kotlin


def test_write_outputs_overwrites(tmp_path, login_document):
    result = convert_document(login_document)
    write_outputs(result, str(tmp_path))
    paths = write_outputs(result, str(tmp_path))
    assert paths["xml"].read_text(encoding="utf-8") == result.xml


# ─── fetch / generate_project ───────────────────────────────────────────────

def test_fetch_whole_file(login_document):
    client = MagicMock()
    client.get_file.return_value = login_document
    assert fetch_document(client, "KEY") is login_document
    client.get_file.assert_called_once_with("KEY")


def test_fetch_single_node():
    client = MagicMock()
    node = make_node("1:2", "FRAME")
    client.get_file_nodes.return_value = {"nodes": {"1:2": {"document": node}}}
    assert fetch_document(client, "KEY", "1:2") == {"document": node}
    client.get_file_nodes.assert_called_once_with("KEY", ["1:2"])


def test_fetch_missing_node_raises():
    client = MagicMock()
    client.get_file_nodes.return_value = {"nodes": {"9:9": None}}
    with pytest.raises(ValueError):
        fetch_document(client, "KEY", "9:9")


def test_generate_project(tmp_path, monkeypatch, login_document):
    fake_client = MagicMock()
    fake_client.get_file.return_value = login_document
    monkeypatch.setattr("figdroid.generator.FigmaAPIClient", lambda token: fake_client)

    result = generate_project("token", "KEY", str(tmp_path), class_name="Login")
    assert len(result.components) == 3
    assert (tmp_path / "java" / "com" / "example" / "app" / "Login.java").exists()
    assert (tmp_path / "res" / "layout" / "generated_layout.xml").exists()
