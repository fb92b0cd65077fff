#!/usr/bin/env python3

import dataclasses
import os
import sys
import types
import unittest

import linebreak
import linebreak.config
import linebreak.tables

from linebreak import BreakOpportunity
from linebreak.scanner import next_break, scan
from linebreak.tests import sample_data_file, sample_tables

Allowed = BreakOpportunity.Allowed
Mandatory = BreakOpportunity.Mandatory


class Scanner(unittest.TestCase):
    def setUp(self):
        self.tables = sample_tables()

    def scan(self, text):
        return list(scan(text, tables=self.tables))

    def testExamples(self):
        for text, expected in (
            ("Hello world!", [(6, Allowed), (12, Mandatory)]),
            ("a b \nc", [(2, Allowed), (5, Mandatory), (6, Mandatory)]),
            ("a\r\nb", [(3, Mandatory), (4, Mandatory)]),
            ("a\n\nb", [(2, Mandatory), (3, Mandatory), (4, Mandatory)]),
            ("a\u2028b", [(2, Mandatory), (3, Mandatory)]),
            ("a\u0085b", [(2, Mandatory), (3, Mandatory)]),
            ("a-b", [(2, Allowed), (3, Mandatory)]),
            ("( a", [(3, Mandatory)]),
            ("$100", [(4, Mandatory)]),
            ("a\u00a0b", [(3, Mandatory)]),
            ("a\u2060b", [(3, Mandatory)]),
            ("a\u200bb", [(2, Allowed), (3, Mandatory)]),
            ("a\u200b b", [(3, Allowed), (4, Mandatory)]),
            ("\u4e00\u4e00", [(1, Allowed), (2, Mandatory)]),
            ("\u4e00\u3041", [(2, Mandatory)]),
            ("\u4e00\u3001\u4e00", [(2, Allowed), (3, Mandatory)]),
            ("\u261d\U0001F3FB", [(2, Mandatory)]),
            ("\U0001F1E6\U0001F1E7\U0001F1E8\U0001F1E9", [(2, Allowed), (4, Mandatory)]),
            ("\U0001F1E6\U0001F1E7\U0001F1E8", [(2, Allowed), (3, Mandatory)]),
        ):
            self.assertEqual(self.scan(text), expected, repr(text))

    def testEmpty(self):
        self.assertEqual(self.scan(""), [])

    def testZWJ(self):
        "No break after a zero width joiner unless mandatory"
        self.assertEqual(self.scan("a\u4e00"), [(1, Allowed), (2, Mandatory)])
        self.assertEqual(self.scan("a\u200d\u4e00"), [(3, Mandatory)])
        self.assertEqual(self.scan("\u200d"), [(1, Mandatory)])
        self.assertEqual(self.scan("a\u200d"), [(2, Mandatory)])
        self.assertEqual(self.scan("a \u200d\u4e00"), [(2, Allowed), (4, Mandatory)])

    def testCombining(self):
        "Marks take on the class of their base"
        self.assertEqual(self.scan("a\u0301b"), [(3, Mandatory)])
        self.assertEqual(self.scan("\u4e00\u0301\u4e00"), [(2, Allowed), (3, Mandatory)])
        # a mark after a space is alphabetic
        self.assertEqual(self.scan("a \u0301b"), [(2, Allowed), (4, Mandatory)])

    def testHebrew(self):
        self.assertEqual(self.scan("\u05d0-\u05d1"), [(3, Mandatory)])
        self.assertEqual(self.scan("\u05d0\u05be\u05d1"), [(3, Mandatory)])

    def testResolved(self):
        "Complex context, unassigned, and surrogates act as alphabetic"
        self.assertEqual(self.scan("\u0e01\u0e02"), [(2, Mandatory)])
        self.assertEqual(self.scan("\u0e01 \u0e02"), [(2, Allowed), (3, Mandatory)])
        self.assertEqual(self.scan("\u0378\u0378a"), [(3, Mandatory)])
        self.assertEqual(self.scan("\ud800a"), [(2, Mandatory)])

    def testInvariants(self):
        for text in (
            "x",
            " ",
            "\n",
            "The quick (\"brown\") fox can't jump 32.3 feet, right?",
            "\u05d0-\u05d1 \u200d\u200d  \u00a0\n\r\n\u2014 \u2014\u2014",
            "\U0001F1E6\u200d\U0001F1E6\u0301\U0001F466\U0001F3FB\ufffc\ufeff\u2024\u2024",
            "".join(chr(c) for c in range(0x20, 0x100)),
        ):
            breaks = self.scan(text)
            offsets = [offset for offset, _ in breaks]
            self.assertEqual(offsets, sorted(set(offsets)), repr(text))
            self.assertNotIn(0, offsets)
            self.assertEqual(breaks[-1], (len(text), Mandatory))
            # every line feed ends a line
            for i, c in enumerate(text):
                if c == "\n":
                    self.assertIn((i + 1, Mandatory), breaks)

    def testLazy(self):
        it = scan("a b c d", tables=self.tables)
        self.assertEqual(next(it), (2, Allowed))
        it.close()

        class Counting:
            def __init__(self, properties):
                self.properties = properties
                self.calls = 0

            def class_index(self, codepoint):
                self.calls += 1
                return self.properties.class_index(codepoint)

        counting = Counting(self.tables.properties)
        it = scan("a " + "b" * 100000, tables=dataclasses.replace(self.tables, properties=counting))
        self.assertEqual(next(it), (2, Allowed))
        # only up to the codepoint after the break has been looked at
        self.assertEqual(counting.calls, 3)
        it.close()

    def testOffset(self):
        text = "one two  three"
        self.assertEqual(list(scan(text, 4, tables=self.tables)), [(9, Allowed), (14, Mandatory)])
        self.assertEqual(list(scan(text, 14, tables=self.tables)), [])
        self.assertEqual(list(scan(text, 99, tables=self.tables)), [])

    def testNextBreak(self):
        text = "one two  three"
        self.assertEqual(next_break(text, tables=self.tables), 4)
        self.assertEqual(next_break(text, 4, tables=self.tables), 9)
        self.assertEqual(next_break(text, 9, tables=self.tables), len(text))
        self.assertEqual(next_break(text, len(text), tables=self.tables), len(text))


class API(unittest.TestCase):
    "Package level functions using the sample data via the environment"

    def setUp(self):
        self.saved = os.environ.get(linebreak.config.ENV_DATA)
        os.environ[linebreak.config.ENV_DATA] = str(sample_data_file)
        linebreak.tables.load.cache_clear()

    def tearDown(self):
        if self.saved is None:
            os.environ.pop(linebreak.config.ENV_DATA, None)
        else:
            os.environ[linebreak.config.ENV_DATA] = self.saved
        linebreak.tables.load.cache_clear()

    def testLoad(self):
        self.assertEqual(linebreak.tables.load(), sample_tables())
        self.assertIs(linebreak.tables.load(), linebreak.tables.load())

    def testFunctions(self):
        self.assertEqual(linebreak.unicode_version, "12.1")
        self.assertEqual(linebreak.class_of("a"), linebreak.BreakClass.AL)
        self.assertEqual(linebreak.class_of(0x1F1E6), linebreak.BreakClass.RI)
        self.assertEqual(linebreak.class_of(-5), linebreak.BreakClass.XX)
        self.assertTrue(linebreak.is_safe_pair(linebreak.BreakClass.AL, linebreak.BreakClass.AL))
        self.assertFalse(linebreak.is_safe_pair(linebreak.BreakClass.SP, linebreak.BreakClass.AL))
        self.assertEqual(list(linebreak.scan("Hello world!")), [(6, Allowed), (12, Mandatory)])
        self.assertEqual(linebreak.line_break_next_break("Hello world!"), 6)

    def testIterators(self):
        text = "a b \nc"
        self.assertEqual(list(linebreak.line_break_iter(text)), ["a ", "b \n", "c"])
        self.assertEqual(
            list(linebreak.line_break_iter_with_offsets(text)), [(0, 2, "a "), (2, 5, "b \n"), (5, 6, "c")]
        )
        self.assertEqual(list(linebreak.line_break_iter_with_offsets(text, 2)), [(2, 5, "b \n"), (5, 6, "c")])
        self.assertEqual(list(linebreak.line_break_iter("")), [])
        # segments always rebuild the text
        text = "The quick (\"brown\") fox\u2014can't\r\njump\u200b32.3 feet, right?"
        self.assertEqual("".join(linebreak.line_break_iter(text)), text)


class Generated(unittest.TestCase):
    "Package level functions using a generated tables module with no data file configured"

    def setUp(self):
        self.saved = os.environ.pop(linebreak.config.ENV_DATA, None)
        self.saved_module = sys.modules.get(linebreak.tables.GENERATED_MODULE_NAME)
        module = types.ModuleType(linebreak.tables.GENERATED_MODULE_NAME)
        exec(compile(linebreak.tables.generate_module(sample_tables(), "test"), "_tables.py", "exec"), module.__dict__)
        sys.modules[linebreak.tables.GENERATED_MODULE_NAME] = module
        linebreak.tables.load.cache_clear()

    def tearDown(self):
        if self.saved is not None:
            os.environ[linebreak.config.ENV_DATA] = self.saved
        if self.saved_module is None:
            sys.modules.pop(linebreak.tables.GENERATED_MODULE_NAME, None)
        else:
            sys.modules[linebreak.tables.GENERATED_MODULE_NAME] = self.saved_module
        linebreak.tables.load.cache_clear()

    def testDefaultTables(self):
        self.assertNotIn(linebreak.config.ENV_DATA, os.environ)
        self.assertEqual(linebreak.tables.load(), sample_tables())
        self.assertEqual(linebreak.class_of("a"), linebreak.BreakClass.AL)
        self.assertEqual(linebreak.class_of(0x110000), linebreak.BreakClass.XX)
        self.assertEqual(list(linebreak.scan("Hello world!")), [(6, Allowed), (12, Mandatory)])
        self.assertEqual(list(linebreak.line_break_iter("a b")), ["a ", "b"])


if __name__ == "__main__":
    unittest.main()
