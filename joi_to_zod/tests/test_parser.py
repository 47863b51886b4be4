import json
import unittest
from unittest import TestCase

from joi_to_zod.config import ConverterConfig
from joi_to_zod.describe_ast import (
    AlternativesNode,
    ArrayNode,
    BooleanNode,
    DescribeParser,
    NumberNode,
    ObjectNode,
    Presence,
    Rule,
    StringNode,
    UnknownNode,
)
from joi_to_zod.errors import ParseError


class TestDescribeParser(TestCase):
    """Test decoding of Joi describe output"""

    def setUp(self):
        self.parser = DescribeParser()

    def test_parse_number_with_rules(self):
        node = self.parser.parse('{"type": "number", "flags": {"description": "some description"}, "rules": [{"name": "integer"}]}')
        self.assertIsInstance(node, NumberNode)
        self.assertEqual(node.flags.description, "some description")
        self.assertIsNone(node.flags.presence)
        self.assertEqual(node.rules, (Rule(name="integer"),))

    def test_parse_object_keeps_input_order(self):
        node = self.parser.parse({"type": "object", "keys": {"b": {"type": "string"}, "a": {"type": "boolean", "flags": {"presence": "required"}}}})
        self.assertIsInstance(node, ObjectNode)
        self.assertEqual([name for name, _ in node.members], ["b", "a"])
        self.assertIsInstance(node.keys["a"], BooleanNode)
        self.assertEqual(node.keys["a"].flags.presence, Presence.REQUIRED)
        self.assertEqual(node.keys["a"].source_path, "#/keys/a")

    def test_missing_collections_default_to_empty(self):
        self.assertEqual(self.parser.parse({"type": "object"}).members, ())
        self.assertEqual(self.parser.parse({"type": "array"}).items, ())
        self.assertEqual(self.parser.parse({"type": "alternatives"}).matches, ())
        string_node = self.parser.parse({"type": "string"})
        self.assertEqual(string_node.allow, ())
        self.assertEqual(string_node.invalid, ())
        self.assertEqual(string_node.rules, ())

    def test_parse_array_with_metas(self):
        node = self.parser.parse(
            {
                "type": "array",
                "flags": {"presence": "required", "description": "A list of Test object", "single": True},
                "metas": [{"className": "TestList"}],
                "items": [{"type": "string"}],
            }
        )
        self.assertIsInstance(node, ArrayNode)
        self.assertTrue(node.flags.single)
        self.assertEqual(node.class_name, "TestList")
        self.assertIsInstance(node.items[0], StringNode)
        self.assertEqual(node.items[0].source_path, "#/items/0")

    def test_unknown_type_is_preserved(self):
        node = self.parser.parse({"type": "fooBar", "flags": {"presence": "optional"}, "custom": [1, 2]})
        self.assertIsInstance(node, UnknownNode)
        self.assertEqual(node.type_name, "fooBar")
        self.assertEqual(node.fields["custom"], [1, 2])
        self.assertEqual(node.flags.presence, Presence.OPTIONAL)

    def test_conditional_match_becomes_unknown(self):
        node = self.parser.parse({"type": "alternatives", "matches": [{"ref": "label", "is": {"type": "any"}}, {"schema": {"type": "number"}}]})
        self.assertIsInstance(node, AlternativesNode)
        self.assertIsInstance(node.matches[0], UnknownNode)
        self.assertEqual(node.matches[0].type_name, "conditional")
        self.assertEqual(node.matches[0].fields["ref"], "label")
        self.assertIsInstance(node.matches[1], NumberNode)

    def test_null_default_is_distinguished_from_absence(self):
        with_default = self.parser.parse({"type": "number", "flags": {"default": None}})
        without_default = self.parser.parse({"type": "number", "flags": {}})
        self.assertTrue(with_default.flags.has_default)
        self.assertIsNone(with_default.flags.default)
        self.assertFalse(without_default.flags.has_default)

    def test_only_with_null_allow_list_is_valid(self):
        node = self.parser.parse({"type": "string", "flags": {"only": True}, "allow": [None]})
        self.assertEqual(node.allow, (None,))

    def test_unknown_flags_are_ignored(self):
        node = self.parser.parse({"type": "string", "flags": {"error": "boom", "empty": {"type": "any"}}})
        self.assertIsInstance(node, StringNode)


class TestDescribeParserErrors(TestCase):
    """Test that malformed describe output raises ParseError"""

    def setUp(self):
        self.parser = DescribeParser()

    def assertParseError(self, source, fragment):
        with self.assertRaises(ParseError) as ctx:
            self.parser.parse(source)
        self.assertIn(fragment, str(ctx.exception))
        return ctx.exception

    def test_malformed_json(self):
        self.assertParseError('{"type": "number",', "Malformed describe JSON")

    def test_top_level_must_be_object(self):
        self.assertParseError("[1, 2]", "Expected an object, got array")

    def test_missing_type(self):
        self.assertParseError({"flags": {}}, "Missing 'type'")

    def test_type_must_be_string(self):
        self.assertParseError({"type": 3}, "'type' must be a string")

    def test_keys_must_be_object(self):
        self.assertParseError({"type": "object", "keys": []}, "'keys' must be an object")

    def test_items_must_be_array(self):
        self.assertParseError({"type": "array", "items": {"type": "string"}}, "Expected an array, got object")

    def test_only_must_be_boolean(self):
        self.assertParseError({"type": "string", "flags": {"only": "yes"}}, "'only' must be a boolean")

    def test_unknown_presence(self):
        self.assertParseError({"type": "string", "flags": {"presence": "sometimes"}}, "Unknown presence 'sometimes'")

    def test_rule_name_must_be_string(self):
        self.assertParseError({"type": "number", "rules": [{"args": {}}]}, "Rule 'name' must be a string")

    def test_description_must_be_string(self):
        self.assertParseError({"type": "number", "flags": {"description": 1}}, "'description' must be a string")

    def test_only_with_empty_allow_list(self):
        self.assertParseError({"type": "number", "flags": {"only": True}}, "allow-list is empty")

    def test_nullable_string_allow_must_be_array(self):
        self.assertParseError({"type": "nullableString", "allow": "a"}, "Expected an array")

    def test_error_reports_nested_path(self):
        error = self.assertParseError({"type": "object", "keys": {"name": {"type": "string", "flags": {"label": []}}}}, "#/keys/name/flags")
        self.assertEqual(error.path, "#/keys/name/flags")

    def test_depth_limit(self):
        describe = {"type": "string"}
        for _ in range(5):
            describe = {"type": "array", "items": [describe]}

        DescribeParser(ConverterConfig(max_depth=5)).parse(describe)
        with self.assertRaises(ParseError):
            DescribeParser(ConverterConfig(max_depth=4)).parse(describe)

    def test_deeply_nested_text_is_a_parse_error(self):
        text = '{"type": "array", "items": [' * 200 + '{"type": "string"}' + "]}" * 200
        with self.assertRaises(ParseError):
            self.parser.parse(text)

    def test_no_partial_tree_on_error(self):
        describe = json.dumps({"type": "object", "keys": {"ok": {"type": "string"}, "bad": {"type": "string", "flags": "x"}}})
        with self.assertRaises(ParseError):
            self.parser.parse(describe)


if __name__ == "__main__":
    unittest.main()
