# --------------------------------------------------------------------
# test_schema.py
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------

import itertools
import unittest
from pathlib import Path

from pistor.errors import (
    ConfigurationError,
    MissingParameterError,
    UnknownParameterError,
)
from pistor.schema import Arity, Parameter, ParameterSchema


# --------------------------------------------------------------------
class ParameterSchemaTests(unittest.TestCase):
    def setUp(self):
        self.schema = ParameterSchema.of(
            single=["name", "output_name"],
            multi=["sources", "flags"],
            required=["name", "sources"],
        )

    def test_duplicate_names_are_rejected(self):
        with self.assertRaises(ValueError):
            ParameterSchema(
                Parameter("name", Arity.SINGLE), Parameter("name", Arity.MULTI)
            )

    def test_keyword(self):
        self.assertEqual(Parameter("output_name", Arity.SINGLE).keyword, "OUTPUT_NAME")

    def test_parse_tokens(self):
        args = self.schema.parse(
            "test", ["NAME", "foo", "SOURCES", "a.c", "b.c", "FLAGS", "-g"]
        )
        self.assertEqual(args["name"], "foo")
        self.assertEqual(args["sources"], ("a.c", "b.c"))
        self.assertEqual(args["flags"], ("-g",))
        self.assertIsNone(args["output_name"])

    def test_parse_kwargs(self):
        args = self.schema.parse("test", kwargs={"name": "foo", "sources": "a.c"})
        self.assertEqual(args["name"], "foo")
        self.assertEqual(args["sources"], ("a.c",))
        self.assertEqual(args["flags"], ())

    def test_kwargs_extend_tokens(self):
        args = self.schema.parse(
            "test",
            ["NAME", "foo", "SOURCES", "a.c"],
            {"sources": ["b.c"], "name": "bar"},
        )
        self.assertEqual(args["name"], "bar")
        self.assertEqual(args["sources"], ("a.c", "b.c"))

    def test_only_declared_names_appear(self):
        args = self.schema.parse("test", kwargs={"name": "foo", "sources": ["a.c"]})
        self.assertEqual(set(args), {"name", "output_name", "sources", "flags"})

    def test_missing_required(self):
        with self.assertRaises(MissingParameterError) as ctx:
            self.schema.parse("my_recipe", kwargs={"name": "foo"})
        self.assertEqual(ctx.exception.parameters, ["sources"])
        self.assertEqual(ctx.exception.recipe, "my_recipe")
        self.assertIn("sources", str(ctx.exception))
        self.assertIn("my_recipe", str(ctx.exception))

    def test_empty_required(self):
        with self.assertRaises(MissingParameterError) as ctx:
            self.schema.parse("test", ["NAME", "SOURCES", "a.c"])
        self.assertEqual(ctx.exception.parameters, ["name"])

        with self.assertRaises(MissingParameterError):
            self.schema.parse("test", kwargs={"name": "foo", "sources": []})

    def test_unknown_kwarg(self):
        with self.assertRaises(UnknownParameterError) as ctx:
            self.schema.parse(
                "my_recipe", kwargs={"name": "foo", "sources": ["a.c"], "colour": "red"}
            )
        self.assertEqual(ctx.exception.tokens, ["colour"])
        self.assertIn("colour", str(ctx.exception))
        self.assertIn("my_recipe", str(ctx.exception))

    def test_unparsed_tokens(self):
        with self.assertRaises(UnknownParameterError) as ctx:
            self.schema.parse("test", ["stray", "NAME", "foo", "extra", "SOURCES", "a.c"])
        self.assertEqual(ctx.exception.tokens, ["stray", "extra"])

    def test_unknown_before_missing(self):
        with self.assertRaises(UnknownParameterError):
            self.schema.parse("test", kwargs={"bogus": "1"})

    def test_single_rejects_list(self):
        with self.assertRaises(ConfigurationError):
            self.schema.parse("test", kwargs={"name": ["a", "b"], "sources": ["a.c"]})

    def test_repeated_single_keyword_replaces(self):
        args = self.schema.parse("test", ["NAME", "a", "SOURCES", "x.c", "NAME", "b"])
        self.assertEqual(args["name"], "b")

    def test_multi_accepts_any_iterable(self):
        for sources in (
            map(str, ["a.c", "b.c"]),
            {"a.c": 1, "b.c": 2}.keys(),
            itertools.chain(["a.c"], ("b.c",)),
            (s for s in ["a.c", "b.c"]),
        ):
            args = self.schema.parse("test", kwargs={"name": "foo", "sources": sources})
            self.assertEqual(args["sources"], ("a.c", "b.c"))

    def test_multi_path_is_one_value(self):
        args = self.schema.parse(
            "test", kwargs={"name": "foo", "sources": Path("src/a.c")}
        )
        self.assertEqual(args["sources"], (str(Path("src/a.c")),))

    def test_single_rejects_iterators(self):
        with self.assertRaises(ConfigurationError):
            self.schema.parse(
                "test", kwargs={"name": map(str, ["a"]), "sources": ["a.c"]}
            )

    def test_parsed_arguments_are_immutable(self):
        args = self.schema.parse("test", kwargs={"name": "foo", "sources": ["a.c"]})
        with self.assertRaises(TypeError):
            args["name"] = "bar"


# --------------------------------------------------------------------
if __name__ == "__main__":
    unittest.main()
