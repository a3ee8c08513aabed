#!/usr/bin/env python
import os
import shutil
import tempfile
import unittest
from unittest import mock

from fastwild.filter_logic import FilterPattern, FilterScanner, DEFAULT_FILTER_FILE


class FilterPatternTests(unittest.TestCase):
    def test_basename_rule(self):
        pat = FilterPattern("foo?.py", "")
        self.assertTrue(pat.hits("foo1.py", False))
        self.assertTrue(pat.hits("src/deep/foo2.py", False))
        self.assertFalse(pat.hits("foobar.py", False))

    def test_dir_only(self):
        pat = FilterPattern("build/", "")
        self.assertTrue(pat.dir_only)
        self.assertTrue(pat.hits("build", True))
        self.assertFalse(pat.hits("build", False))

    def test_negation(self):
        pat = FilterPattern("!important.log", "")
        self.assertTrue(pat.negation)
        self.assertTrue(pat.hits("important.log", False))
        self.assertFalse(pat.match("important.log", False))

    def test_escaped_leading_characters(self):
        pat = FilterPattern(r"\!bang.txt", "")
        self.assertFalse(pat.negation)
        self.assertTrue(pat.hits("!bang.txt", False))
        pat2 = FilterPattern(r"\#hash.txt", "")
        self.assertTrue(pat2.hits("#hash.txt", False))

    def test_path_rule(self):
        pat = FilterPattern("docs/*.md", "")
        self.assertFalse(pat.basename_only)
        self.assertTrue(pat.hits("docs/readme.md", False))
        # '*' is allowed to cross directory separators.
        self.assertTrue(pat.hits("docs/api/index.md", False))
        self.assertFalse(pat.hits("src/docs/readme.md", False))

    def test_anchored_rule(self):
        pat = FilterPattern("/top.txt", "")
        self.assertTrue(pat.anchored)
        self.assertTrue(pat.hits("top.txt", False))
        self.assertFalse(pat.hits("sub/top.txt", False))

    def test_casefold(self):
        pat = FilterPattern("*.TXT", "", casefold=True)
        self.assertTrue(pat.hits("Notes.txt", False))
        self.assertFalse(FilterPattern("*.TXT", "").hits("Notes.txt", False))


class FilterScannerTests(unittest.TestCase):
    def setUp(self):
        self.root = tempfile.mkdtemp(prefix="filter_logic_test_")

    def tearDown(self):
        shutil.rmtree(self.root)

    def create_file(self, rel_path, content=""):
        path = os.path.join(self.root, rel_path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)

    def test_add_patterns_skips_comments_and_blanks(self):
        scanner = FilterScanner(self.root)
        scanner.add_patterns(["# comment", "", "   ", "*.log  \n", "!keep.log"])
        self.assertEqual([p.original for p in scanner.patterns], ["*.log", "!keep.log"])

    def test_last_rule_wins(self):
        scanner = FilterScanner(self.root)
        scanner.add_patterns(["*.log", "!keep.log"])
        self.assertTrue(scanner.should_exclude("debug.log"))
        self.assertFalse(scanner.should_exclude("keep.log"))
        self.assertFalse(scanner.should_exclude("main.py"))

    def test_filter_names(self):
        scanner = FilterScanner(self.root)
        scanner.add_patterns(["*.tmp", "cache*"])
        names = ["a.py", "b.tmp", "cache_dir", "notes.txt"]
        self.assertEqual(scanner.filter_names(names), ["a.py", "notes.txt"])

    def test_load_patterns_from_nested_files(self):
        self.create_file(DEFAULT_FILTER_FILE, "*.log\n")
        self.create_file(os.path.join("sub", DEFAULT_FILTER_FILE), "!keep.log\n/local.txt\n")
        self.create_file(os.path.join(".git", DEFAULT_FILTER_FILE), "*\n")
        scanner = FilterScanner(self.root)
        scanner.load_patterns()
        self.assertEqual([p.source_dir for p in scanner.patterns], ["", "sub", "sub"])
        self.assertTrue(scanner.should_exclude("debug.log"))
        self.assertTrue(scanner.should_exclude("sub/debug.log"))
        self.assertFalse(scanner.should_exclude("sub/keep.log"))
        # Rules from sub/ do not reach outside sub/.
        self.assertTrue(scanner.should_exclude("keep.log"))
        self.assertTrue(scanner.should_exclude("sub/local.txt"))
        self.assertFalse(scanner.should_exclude("local.txt"))
        self.assertFalse(scanner.should_exclude("sub/deeper/local.txt"))

    def test_custom_filter_file_name(self):
        self.create_file(".myrules", "*.bak\n")
        scanner = FilterScanner(self.root, filter_file=".myrules")
        scanner.load_patterns()
        self.assertTrue(scanner.should_exclude("old.bak"))

    def test_unreadable_filter_file_is_skipped(self):
        self.create_file(DEFAULT_FILTER_FILE, "*.log\n")
        scanner = FilterScanner(self.root)
        with mock.patch("fastwild.filter_logic.open", side_effect=PermissionError("denied"), create=True):
            with self.assertLogs(level="WARNING"):
                scanner.load_patterns()
        self.assertEqual(scanner.patterns, [])

    def test_windows_separators_are_normalized(self):
        scanner = FilterScanner(self.root)
        scanner.add_patterns(["docs/*.md"])
        self.assertTrue(scanner.should_exclude("docs\\readme.md"))


if __name__ == "__main__":
    unittest.main()
