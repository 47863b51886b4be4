import json
import unittest
from unittest import TestCase

from joi_to_zod import ConversionError, ConverterConfig, FormatError, JoiToZodGenerator, ParseError, to_zod
from joi_to_zod.utils import export_name, snake_to_pascal_case


class FakeJoiSchema:
    """Stands in for a live schema object exposing describe()"""

    def __init__(self, description):
        self.description = description

    def describe(self):
        return self.description


class TestToZod(TestCase):
    def test_from_schema_object(self):
        self.assertEqual(to_zod(FakeJoiSchema({"type": "number"})), "z.number()")

    def test_from_dict_and_text(self):
        describe = {"type": "number", "flags": {"description": "x"}, "rules": [{"name": "integer"}]}
        self.assertEqual(to_zod(describe, default_to_optional=True), 'z.number().int().describe("x").optional()')
        self.assertEqual(to_zod(json.dumps(describe)), 'z.number().int().describe("x")')

    def test_parse_error_becomes_conversion_error(self):
        with self.assertRaises(ConversionError) as ctx:
            to_zod("{not json")
        self.assertIsInstance(ctx.exception.__cause__, ParseError)
        self.assertIn("Malformed describe JSON", str(ctx.exception))

    def test_format_error_becomes_conversion_error(self):
        # Python's json module accepts NaN, which has no JSON form
        with self.assertRaises(ConversionError) as ctx:
            to_zod('{"type": "number", "flags": {"default": NaN}}')
        self.assertIsInstance(ctx.exception.__cause__, FormatError)

    def test_unknown_type_does_not_fail(self):
        self.assertIn('needsManualFix("fooBar")', to_zod({"type": "fooBar"}))


class TestJoiToZodGenerator(TestCase):
    def setUp(self):
        self.config = ConverterConfig(add_generation_comment=False)

    def test_root_presence_comes_from_config(self):
        config = ConverterConfig(root_default_optional=True)
        self.assertEqual(JoiToZodGenerator({"type": "string"}, config).generate(), "z.string().optional()")
        self.assertEqual(JoiToZodGenerator({"type": "string"}, config).generate(False), "z.string()")

    def test_module_uses_class_name_meta(self):
        describe = {"type": "array", "metas": [{"className": "TestList"}], "items": [{"type": "string"}]}
        module = JoiToZodGenerator(describe, self.config).generate_module("ignored")
        self.assertEqual(module, 'import { z } from "zod";\n\nexport const TestList = z.array(z.string());\n')

    def test_module_name_from_file_stem(self):
        module = JoiToZodGenerator({"type": "boolean"}, self.config).generate_module("basic_object")
        self.assertIn("export const BasicObjectSchema = z.boolean();", module)

    def test_module_custom_import(self):
        config = ConverterConfig(add_generation_comment=False, zod_identifier="zod", zod_import="zod/v3")
        module = JoiToZodGenerator({"type": "date"}, config).generate_module("when")
        self.assertTrue(module.startswith('import { z as zod } from "zod/v3";\n'))
        self.assertIn("export const WhenSchema = zod.date();", module)

    def test_module_generation_comment(self):
        module = JoiToZodGenerator({"type": "date"}).generate_module("when")
        first_line = module.split("\n")[0]
        self.assertTrue(first_line.startswith("// Generated by joi_to_zod v"))
        self.assertTrue(first_line.endswith(": joi_to_zod"))

    def test_manual_fixes(self):
        generator = JoiToZodGenerator({"type": "string", "rules": [{"name": "email"}]})
        self.assertEqual(generator.manual_fixes, [])
        generator.generate()
        self.assertEqual([fix.tag for fix in generator.manual_fixes], ["email"])

    def test_parse_error_propagates(self):
        with self.assertRaises(ParseError):
            JoiToZodGenerator({"type": "string", "flags": {"only": True}}).generate()


def nested_describe(depth):
    """Objects nested ``depth`` times, each with flags and a rule"""
    describe = {"type": "string", "flags": {"description": "leaf", "label": "Leaf"}, "rules": [{"name": "min", "args": {"limit": 1}}]}
    for _ in range(depth):
        describe = {
            "type": "object",
            "flags": {"description": "level", "label": "Level"},
            "rules": [{"name": "min", "args": {"limit": 1}}],
            "keys": {"child": describe},
        }
    return describe


class TestDeepSchemas(TestCase):
    def test_deepest_accepted_schema_converts(self):
        depth = ConverterConfig().max_depth
        output = to_zod(nested_describe(depth))
        self.assertEqual(output.count(".min(1)"), depth + 1)
        self.assertEqual(output.count('.label("Level")'), depth)
        self.assertTrue(output.endswith('.describe("level").label("Level")'))

    def test_one_level_too_deep_is_a_conversion_error(self):
        depth = ConverterConfig().max_depth + 1
        with self.assertRaises(ConversionError) as ctx:
            to_zod(nested_describe(depth))
        self.assertIsInstance(ctx.exception.__cause__, ParseError)

    def test_long_rule_chain(self):
        describe = {"type": "string", "rules": [{"name": "trim"}] * 1200}
        generator = JoiToZodGenerator(describe)
        output = generator.generate()
        self.assertTrue(output.startswith('z.string().needsManualFix("trim").'))
        self.assertEqual(output.count('needsManualFix("trim")'), 1200)
        self.assertEqual(len(generator.manual_fixes), 1200)

    def test_recursion_beyond_the_interpreter_limit_is_an_error(self):
        config = ConverterConfig(max_depth=100000)
        with self.assertRaises(ConversionError):
            to_zod(nested_describe(5000), config=config)


class TestUtils(TestCase):
    def test_snake_to_pascal_case(self):
        self.assertEqual(snake_to_pascal_case("basic_object"), "BasicObject")
        self.assertEqual(snake_to_pascal_case("test-list.describe"), "TestListDescribe")
        self.assertEqual(snake_to_pascal_case("userProfile"), "UserProfile")
        self.assertEqual(snake_to_pascal_case(""), "")

    def test_export_name(self):
        self.assertEqual(export_name("Thing", "file"), "Thing")
        self.assertEqual(export_name(None, "user"), "UserSchema")
        self.assertEqual(export_name(None, "user_schema"), "UserSchema")
        self.assertEqual(export_name(None, "3d_point"), "_3DPointSchema")
        self.assertEqual(export_name(None, None), "GeneratedSchema")
        self.assertEqual(export_name(None, "user", suffix=""), "User")


if __name__ == "__main__":
    unittest.main()
