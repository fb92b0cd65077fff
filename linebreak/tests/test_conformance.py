#!/usr/bin/env python3

# Replays the Unicode LineBreakTest.txt.  The data files are not shipped
# so this only runs when they are available.  Use 'python setup.py fetch'
# or point LINEBREAK_DATA and LINEBREAK_TEST_DATA at copies.

import unittest

import linebreak.config

from linebreak.__main__ import parse_break_tests
from linebreak.properties import parse_records
from linebreak.scanner import scan
from linebreak.tables import compile_file

data_file = linebreak.config.data_file()
test_file = linebreak.config.conformance_file()


@unittest.skipUnless(data_file and data_file.exists() and test_file, "LineBreak.txt and LineBreakTest.txt not available")
class Conformance(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.tables = compile_file(data_file)

    def testLineBreakTest(self):
        fails = []
        count = 0
        with open(test_file, encoding="utf8") as f:
            for test in parse_break_tests(f):
                count += 1
                seen = [offset for offset, _ in scan(test.text, tables=self.tables)]
                if seen != test.breaks:
                    fails.append(f"Line {test.line_number} got {seen} expected {test.breaks} - {test.comment}")
        self.assertGreater(count, 1000)
        self.assertEqual(fails, [])

    def testClassifier(self):
        "Every listed codepoint has its class"
        for record in parse_records(data_file.read_text("utf8")):
            for codepoint in {record.start, record.end}:
                self.assertEqual(self.tables.properties.class_of(codepoint), record.cls, f"U+{codepoint:04X}")


if __name__ == "__main__":
    unittest.main()
