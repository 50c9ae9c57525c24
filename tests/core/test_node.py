# tests/core/test_node.py
import pytest
from pydantic import ValidationError

from sxml.exceptions import (
    AttributeAbsentError,
    AttributeConversionError,
    AttributeMapEmptyError,
    ChildAbsentError,
    InnerContentUnavailableError,
    NotWellFormedError,
)
from sxml.node import XMLNode

CONFIG_XML = """<?xml version="1.0" encoding="UTF-8"?>
<config version="2">
    <server host="localhost" port="8080" />
    <users>
        <user name="ann" admin="true"/>
        <user name="bob" admin="false"/>
    </users>
</config>
"""


@pytest.fixture
def config_node():
    """A formatted document with a processing instruction and nested arrays."""
    return XMLNode.from_text(CONFIG_XML)


def test_root_name_and_attribute():
    node = XMLNode.from_text('<a x="1"><b>hi</b><c/></a>')
    assert node.name == "a"
    assert node.root_tag == '<a x="1">'
    assert node.get_attribute("x") == "1"
    assert node.has_inner_content


def test_get_child_returns_exact_span():
    node = XMLNode.from_text('<a x="1"><b>hi</b><c/></a>')
    assert node.get_child("b").to_text() == "<b>hi</b>"
    c = node.get_child("c")
    assert c.to_text() == "<c/>"
    assert not c.has_inner_content


def test_self_closing_root_has_no_inner_content():
    node = XMLNode.from_text('<a x="1" />')
    assert not node.has_inner_content
    assert not node.has_child("b")
    assert node.child_names() == []
    with pytest.raises(InnerContentUnavailableError) as exc:
        node.get_child("b")
    assert exc.value.name == "a"
    with pytest.raises(InnerContentUnavailableError):
        node.get_child_array("b")


def test_self_closing_root_still_has_attributes():
    node = XMLNode.from_text('<a x="1"/>')
    assert node.get_attribute("x") == "1"


def test_get_child_array_returns_every_instance():
    node = XMLNode.from_text("<a><b/><b/><b/></a>")
    children = node.get_child_array("b")
    assert len(children) == 3
    assert all(child.to_text() == "<b/>" for child in children)


def test_get_child_array_skips_other_siblings():
    node = XMLNode.from_text('<list><item id="1"/><other/><item id="2">x</item></list>')
    items = node.get_child_array("item")
    assert [i.get_attribute("id") for i in items] == ["1", "2"]
    assert not items[0].has_inner_content
    assert items[1].has_inner_content


def test_get_child_array_single_element():
    node = XMLNode.from_text("<a><c/><b>1</b></a>")
    assert [b.to_text() for b in node.get_child_array("b")] == ["<b>1</b>"]


def test_get_child_array_absent_fails():
    node = XMLNode.from_text("<a><b/></a>")
    with pytest.raises(ChildAbsentError) as exc:
        node.get_child_array("c")
    assert exc.value.name == "c"


def test_get_child_returns_outer_same_named_tag():
    node = XMLNode.from_text("<a><b><b/></b></a>")
    outer = node.get_child("b")
    assert outer.to_text() == "<b><b/></b>"
    assert outer.get_child("b").to_text() == "<b/>"


def test_unclosed_child_is_not_well_formed():
    node = XMLNode.from_text("<a><b>x</a>")
    with pytest.raises(NotWellFormedError):
        node.get_child("b")
    with pytest.raises(NotWellFormedError):
        node.get_child("c")


def test_missing_child_fails_with_its_name():
    node = XMLNode.from_text("<a><b/></a>")
    with pytest.raises(ChildAbsentError) as exc:
        node.get_child("c")
    assert exc.value.name == "c"
    assert exc.value.code == 2


def test_text_only_content_has_no_children():
    node = XMLNode.from_text("<a>hello</a>")
    assert node.has_inner_content
    with pytest.raises(ChildAbsentError):
        node.get_child("b")


def test_has_child_is_a_loose_probe():
    node = XMLNode.from_text("<a><b><deep/></b></a>")
    assert node.has_child("deep")
    assert not node.has_child("zzz")
    with pytest.raises(ChildAbsentError):
        node.get_child("deep")


def test_attribute_with_url_does_not_break_sibling_scan():
    node = XMLNode.from_text('<a><link href="http://example.com/x"/><b/></a>')
    assert node.get_child("b").to_text() == "<b/>"
    assert node.get_child("link").get_attribute("href") == "http://example.com/x"


@pytest.mark.parametrize("raw", ["", "   ", "hello", "<a>", "<a><b/>"])
def test_construction_rejects_malformed_input(raw):
    with pytest.raises(NotWellFormedError):
        XMLNode.from_text(raw)


def test_round_trip_reproduces_equivalent_nodes():
    node = XMLNode.from_text('<a x="1"><b y="2">hi</b><c/></a>')
    for n in (node, node.get_child("b"), node.get_child("c")):
        again = XMLNode.from_text(n.to_text())
        assert again == n
        assert again.name == n.name
        assert again.attrs == n.attrs
        assert again.has_inner_content == n.has_inner_content


def test_attribute_absent_versus_empty_map():
    with pytest.raises(AttributeAbsentError) as exc:
        XMLNode.from_text('<a x="1"/>').get_attribute("y")
    assert exc.value.name == "y"
    with pytest.raises(AttributeMapEmptyError):
        XMLNode.from_text("<a/>").get_attribute("x")
    assert XMLNode.from_text('<a x="1"/>').has_attribute("x")
    assert not XMLNode.from_text('<a x="1"/>').has_attribute("y")


def test_typed_attribute_getters():
    node = XMLNode.from_text(
        '<cfg enabled="TRUE" port="8080" size="9000000000" ratio="0.5" bad="abc"/>'
    )
    assert node.get_bool_attr("enabled") is True
    assert node.get_int_attr("port") == 8080
    assert node.get_long_attr("size") == 9000000000
    assert node.get_double_attr("ratio") == 0.5
    assert node.get_string_attr("bad") == "abc"
    with pytest.raises(AttributeConversionError):
        node.get_int_attr("size")
    with pytest.raises(AttributeConversionError) as exc:
        node.get_int_attr("bad")
    assert exc.value.name == "bad"
    assert exc.value.target_type == "int"


def test_formatted_document(config_node):
    assert config_node.to_text() == (
        '<config version="2"><server host="localhost" port="8080"/>'
        '<users><user name="ann" admin="true"/><user name="bob" admin="false"/></users></config>'
    )
    assert config_node.get_int_attr("version") == 2
    assert config_node.get_child("server").get_int_attr("port") == 8080
    users = config_node.get_child("users").get_child_array("user")
    assert [u.get_attribute("name") for u in users] == ["ann", "bob"]
    assert [u.get_bool_attr("admin") for u in users] == [True, False]
    assert config_node.child_names() == ["server", "users"]


def test_str_matches_to_text(config_node):
    assert str(config_node) == config_node.to_text()


def test_nodes_are_frozen(config_node):
    with pytest.raises(ValidationError):
        config_node.name = "other"


def test_attributes_are_read_only():
    node = XMLNode.from_text('<a x="1"/>')
    with pytest.raises(TypeError):
        node.attrs["x"] = "2"
    with pytest.raises(TypeError):
        node.attrs["y"] = "3"
    assert node.get_attribute("x") == "1"
    assert not node.has_attribute("y")


def test_attributes_are_copied_on_construction():
    source = {"x": "1"}
    node = XMLNode(text='<a x="1"/>', root_tag='<a x="1"/>', name="a", attrs=source)
    source["x"] = "2"
    assert node.get_attribute("x") == "1"
    assert XMLNode(text="<a/>", root_tag="<a/>", name="a").attrs == {}
