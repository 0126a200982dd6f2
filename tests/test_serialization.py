"""Tests for XML parsing and serialization."""

import pytest
from config_tree import ConfigFileError
from config_tree import ConfigParseError
from config_tree import ConfigValidationError
from config_tree import Configuration
from config_tree import Diagnostic
from lxml import etree


def assert_same_tree(actual, expected):
    assert actual.name == expected.name
    assert actual.value == expected.value
    assert actual.attributes == expected.attributes
    assert list(actual.attributes) == list(expected.attributes)
    assert len(actual.children) == len(expected.children)
    for actual_child, expected_child in zip(actual.children, expected.children):
        assert_same_tree(actual_child, expected_child)


class TestParse:
    """Test building trees from XML."""

    def test_concrete_example(self):
        """Test the two-item configuration parses as expected."""
        root = Configuration.from_string('<config id="1"><item x="a"/><item x="b"/></config>')

        assert root.name == "config"
        assert root.value is None
        assert root.attributes == {"id": "1"}
        assert [child.name for child in root.children] == ["item", "item"]
        assert root.children[0].attributes == {"x": "a"}
        assert root.children[1].attributes == {"x": "b"}

    def test_value_is_trimmed(self):
        """Test direct text is stripped."""
        assert Configuration.from_string("<host>  localhost \n</host>").value == "localhost"

    def test_whitespace_only_text_is_no_value(self):
        """Test an element with only whitespace text has no value."""
        root = Configuration.from_string("<config>\n  <item/>\n</config>")
        assert root.value is None

    def test_value_excludes_descendant_text(self):
        """Test only the element's own text forms its value."""
        root = Configuration.from_string("<a>head<b>inner</b>tail</a>")
        assert root.value == "headtail"
        assert root.children[0].value == "inner"

    def test_comments_and_instructions_skipped(self):
        """Test only child elements become child nodes."""
        root = Configuration.from_string("<a><!-- note --><?pi data?><b/></a>")
        assert [child.name for child in root.children] == ["b"]

    def test_namespaced_elements_use_local_name(self):
        """Test namespaces are stripped from node names."""
        root = Configuration.from_string('<config xmlns="urn:example"><item/></config>')
        assert root.name == "config"
        assert root.children[0].name == "item"

    def test_namespaced_attributes_skipped(self):
        """Test attributes in a namespace are not loaded."""
        root = Configuration.from_string(
            '<config xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
            'xsi:noNamespaceSchemaLocation="config.xsd" id="1"/>'
        )
        assert root.attributes == {"id": "1"}

    def test_attribute_document_order(self):
        """Test attributes keep document order."""
        root = Configuration.from_string('<a z="1" b="2" m="3"/>')
        assert list(root.attributes) == ["z", "b", "m"]

    def test_string_with_declaration(self):
        """Test text with an encoding declaration is accepted."""
        root = Configuration.from_string('<?xml version="1.0" encoding="UTF-8"?><a>ü</a>')
        assert root.value == "ü"

    def test_bytes_input(self):
        """Test bytes are parsed directly."""
        assert Configuration.from_string(b"<a/>").name == "a"

    def test_from_document(self):
        """Test populating from lxml documents and elements."""
        element = etree.fromstring("<a><b/></a>")
        assert Configuration.from_document(element).children[0].name == "b"
        assert Configuration.from_document(etree.ElementTree(element)).name == "a"

    def test_from_file(self, tmp_path):
        """Test parsing a file."""
        path = tmp_path / "config.xml"
        path.write_text('<config id="1"><item x="a"/></config>')
        root = Configuration.from_file(path)
        assert root.name == "config"
        assert root.children[0].get_attribute("x") == "a"

    def test_from_missing_file(self, tmp_path):
        """Test a missing file raises ConfigFileError."""
        with pytest.raises(ConfigFileError):
            Configuration.from_file(tmp_path / "missing.xml")

    def test_malformed_string(self):
        """Test malformed XML raises one error with all diagnostics."""
        with pytest.raises(ConfigParseError) as exc_info:
            Configuration.from_string("<config><item></config>")

        error = exc_info.value
        assert error.diagnostics
        assert all(isinstance(diagnostic, Diagnostic) for diagnostic in error.diagnostics)
        assert len(str(error).splitlines()) == len(error.diagnostics)

    def test_malformed_file_reports_line(self, tmp_path):
        """Test file diagnostics carry line numbers."""
        path = tmp_path / "broken.xml"
        path.write_text("<config>\n<item>\n</config>\n")

        with pytest.raises(ConfigParseError) as exc_info:
            Configuration.from_file(path)

        assert exc_info.value.diagnostics[0].line >= 1

    def test_diagnostics_exclude_earlier_validation_errors(self, tmp_path):
        """Test a parse failure after a failed validation reports only its own errors."""
        schema = tmp_path / "config.xsd"
        schema.write_text(
            '<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"><xs:element name="config"/></xs:schema>'
        )
        other = Configuration("other")
        other.schema_file = schema
        with pytest.raises(ConfigValidationError):
            other.validate()

        with pytest.raises(ConfigParseError) as exc_info:
            Configuration.from_string("<config><item></config>")

        messages = [diagnostic.message for diagnostic in exc_info.value.diagnostics]
        assert messages
        assert not any("other" in message for message in messages)


class TestSerialize:
    """Test building XML from trees."""

    @pytest.fixture
    def tree(self):
        root = Configuration("appserver")
        root.set_attribute("version", "1.0")
        root.set_attribute("name", "main")
        params = Configuration("params")
        params.add_child_with_name_and_value("param", "value-1").set_attribute("name", "a")
        params.add_child_with_name_and_value("param", "value-2").set_attribute("name", "b")
        root.add_child(params)
        root.add_child_with_name_and_value("description", "A server")
        return root

    def test_round_trip(self, tree):
        """Test parse(serialize(tree)) reproduces the tree."""
        assert_same_tree(Configuration.from_string(tree.to_string()), tree)

    def test_round_trip_without_pretty_print(self, tree):
        """Test compact output round-trips as well."""
        assert_same_tree(Configuration.from_string(tree.to_string(pretty_print=False)), tree)

    def test_concrete_example_round_trip(self):
        """Test the two-item configuration survives serialize and parse."""
        root = Configuration.from_string('<config id="1"><item x="a"/><item x="b"/></config>')
        assert_same_tree(Configuration.from_string(root.to_string()), root)

    def test_element_structure(self, tree):
        """Test nodes map to element tag, text and attributes."""
        element = tree.to_element()
        assert element.tag == "appserver"
        assert element.text is None
        assert list(element.attrib.items()) == [("version", "1.0"), ("name", "main")]
        assert [child.tag for child in element] == ["params", "description"]
        assert element[1].text == "A server"

    def test_namespace_only_on_root(self, tree):
        """Test the namespace applies to the outermost element only."""
        element = tree.to_element("urn:example")
        assert element.tag == "{urn:example}appserver"
        assert element[0].tag == "params"
        assert element[0][0].tag == "param"

    def test_to_document(self, tree):
        """Test to_document wraps the root element."""
        document = tree.to_document()
        assert isinstance(document, etree._ElementTree)
        assert document.getroot().tag == "appserver"

    def test_to_string_has_declaration(self, tree):
        """Test serialized strings carry an XML declaration."""
        assert tree.to_string().startswith("<?xml")

    def test_non_string_attribute_values(self):
        """Test attribute values are written as strings."""
        node = Configuration("server")
        node.set_attribute("port", 80)
        assert node.to_element().get("port") == "80"


class TestSave:
    """Test writing trees to files."""

    def test_save_and_reload(self, tmp_path):
        """Test saving writes a file that parses back to the same tree."""
        root = Configuration.from_string('<config id="1"><item x="a">one</item><item x="b"/></config>')
        path = tmp_path / "out" / "config.xml"

        root.save(path)

        assert path.exists()
        assert path.read_text(encoding="utf-8").startswith("<?xml")
        assert_same_tree(Configuration.from_file(path), root)

    def test_save_with_namespace(self, tmp_path):
        """Test saving with a namespace on the root element."""
        path = tmp_path / "config.xml"
        Configuration.from_string("<config/>").save(path, namespace="urn:example")
        assert etree.parse(str(path)).getroot().tag == "{urn:example}config"

    def test_save_failure(self, tmp_path):
        """Test an unwritable target raises ConfigFileError."""
        blocker = tmp_path / "file"
        blocker.write_text("")

        with pytest.raises(ConfigFileError):
            Configuration("config").save(blocker / "config.xml")
