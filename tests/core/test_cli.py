# tests/core/test_cli.py
import io
import json

import pytest

from sxml.cli import main, resolve_path
from sxml.managers.config_manager import config_manager
from sxml.node import XMLNode

DOC = """<?xml version="1.0"?>
<catalog owner="shop">
  <meta><title>Spring</title></meta>
  <items>
    <item sku="A1" price="9.5"/>
    <item sku="B2" price="12"/>
  </items>
</catalog>
"""


@pytest.fixture(autouse=True)
def fresh_settings():
    yield
    config_manager.reset()


@pytest.fixture
def doc_file(tmp_path):
    path = tmp_path / "catalog.xml"
    path.write_text(DOC, encoding="utf-8")
    return str(path)


def test_cli_format(doc_file, capsys):
    assert main(["format", doc_file]) == 0
    out = capsys.readouterr().out.strip()
    assert out.startswith('<catalog owner="shop"><meta><title>Spring</title></meta>')


def test_cli_get_node(doc_file, capsys):
    assert main(["get", doc_file, "meta.title"]) == 0
    assert capsys.readouterr().out.strip() == "<title>Spring</title>"


def test_cli_get_typed_attribute(doc_file, capsys):
    assert main(["get", doc_file, "", "--attr", "owner"]) == 0
    assert capsys.readouterr().out.strip() == "shop"


def test_cli_array_attributes(doc_file, capsys):
    assert main(["array", doc_file, "items", "item", "--attr", "sku"]) == 0
    assert capsys.readouterr().out.split() == ["A1", "B2"]


def test_cli_array_json(doc_file, capsys):
    assert main(["array", doc_file, "items", "item", "--attr", "price", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == ["9.5", "12"]


def test_cli_children(doc_file, capsys):
    assert main(["children", doc_file]) == 0
    assert capsys.readouterr().out.split() == ["meta", "items"]


def test_cli_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO('<a><b n="1"/></a>'))
    assert main(["get", "-", "b", "--attr", "n", "--type", "int"]) == 0
    assert capsys.readouterr().out.strip() == "1"


def test_cli_reports_missing_child(doc_file, capsys):
    assert main(["get", doc_file, "missing"]) == 1
    out = capsys.readouterr().out
    assert "[2]" in out
    assert "missing" in out


def test_cli_reports_conversion_error(doc_file, capsys):
    assert main(["get", doc_file, "", "--attr", "owner", "--type", "int"]) == 1
    assert "[6]" in capsys.readouterr().out


def test_cli_missing_file(tmp_path, capsys):
    assert main(["format", str(tmp_path / "nope.xml")]) == 1
    assert "not found" in capsys.readouterr().out


def test_cli_without_arguments_prints_usage(capsys):
    assert main([]) == 2
    assert "Usage:" in capsys.readouterr().out


def test_resolve_path_with_custom_separator():
    root = XMLNode.from_text("<a><b><c/></b></a>")
    assert resolve_path(root, "b/c", separator="/").to_text() == "<c/>"
    assert resolve_path(root, "") is root


def test_cli_undecodable_file(tmp_path, capsys):
    path = tmp_path / "latin1.xml"
    path.write_bytes(b'<a title="caf\xe9"/>')
    assert main(["format", str(path)]) == 1
    assert "❌ Error" in capsys.readouterr().out


def test_cli_set_overrides_path_separator(doc_file, capsys):
    assert main(["--set", "cli.path_separator=/", "get", doc_file, "meta/title"]) == 0
    assert capsys.readouterr().out.strip() == "<title>Spring</title>"


def test_cli_overrides_last_one_run(doc_file, capsys):
    assert main(["--set", "cli.path_separator=/", "get", doc_file, "meta/title"]) == 0
    assert main(["get", doc_file, "meta.title"]) == 0
    assert capsys.readouterr().out.strip().splitlines()[-1] == "<title>Spring</title>"


def test_cli_config_shows_coerced_override(capsys):
    assert main(["--set", "cli.progress_threshold=5", "config"]) == 0
    settings = json.loads(capsys.readouterr().out)
    assert settings["cli"]["progress_threshold"] == 5
    assert settings["cli"]["path_separator"] == "."


def test_cli_rejects_malformed_override(doc_file, capsys):
    assert main(["--set", "cli.path_separator", "format", doc_file]) == 2
    assert "key.path=value" in capsys.readouterr().out
