# fastwild/filter_logic.py
"""
This module implements gitignore-style exclusion rules on top of the wildcard matcher.
Rules are read from filter files (".wildfilter" by default) found anywhere in a directory
tree and decide whether a given file or directory should be left out of a listing.

Key classes:
    - FilterPattern: Represents a single rule line from a filter file.
    - FilterScanner: Walks through a directory tree, collects filter rules, and
      determines whether files/directories should be excluded.

Rule syntax:
    - Blank lines and lines starting with '#' are skipped.
    - A leading '!' re-includes paths excluded by an earlier rule.
    - A trailing '/' makes the rule apply to directories only.
    - A leading '/' anchors the rule to the directory holding the filter file.
    - A leading '\\' lets a rule start with a literal '#' or '!'.
    - Rules without a '/' are matched against the basename of a path, rules with a
      '/' against the whole path relative to the filter file's directory.

Only '*' and '?' are special inside a rule. Unlike git, '*' also matches '/'.
"""

import os
import logging
from typing import Iterable, List, Optional
from .wildcard import matches

# Configure logging to output warnings; used to report unreadable filter files.
logging.basicConfig(level=logging.WARNING)

DEFAULT_FILTER_FILE = ".wildfilter"


class FilterPattern:
    """
    Represents a single filter rule.

    This class processes a rule string (from a filter file), taking into account
    negation (starting with '!'), directory-only rules (ending with '/') and
    anchoring (starting with '/').
    """

    def __init__(self, pattern: str, source_dir: str, casefold: bool = False) -> None:
        # Save the raw rule as provided.
        self.original = pattern
        # The relative directory where this filter file was located.
        self.source_dir = source_dir
        self.casefold = casefold

        # A leading backslash only protects a leading '#' or '!'.
        escaped = pattern.startswith('\\')
        if escaped:
            pattern = pattern[1:]

        self.negation = not escaped and pattern.startswith('!')
        if self.negation:
            pattern = pattern[1:]

        self.dir_only = pattern.endswith('/')
        if self.dir_only:
            pattern = pattern.rstrip('/')

        # A leading '/' anchors the rule; it is not part of what gets matched.
        self.anchored = pattern.startswith('/')
        if self.anchored:
            pattern = pattern.lstrip('/')

        # Rules without a slash match the basename at any depth.
        self.basename_only = not self.anchored and '/' not in pattern

        if self.casefold:
            pattern = pattern.lower()
        self.raw_pattern = pattern

    def hits(self, path: str, is_dir: bool) -> bool:
        """
        Determines if the given path matches this rule.

        Args:
            path: The file or directory path, relative to the rule's source directory.
            is_dir: Boolean indicating if the path is a directory.

        Returns:
            True if the path matches the rule, regardless of negation.
        """
        if self.dir_only and not is_dir:
            return False
        if self.basename_only:
            subject = path.rsplit('/', 1)[-1]
        else:
            subject = path
        return matches(subject, self.raw_pattern, ignore_case=self.casefold)

    def match(self, path: str, is_dir: bool) -> bool:
        """
        Returns True if the rule hits the path and is not a negation rule.
        """
        return self.hits(path, is_dir) and not self.negation

    def __repr__(self) -> str:
        return f"FilterPattern({self.original!r}, source_dir={self.source_dir!r})"


class FilterScanner:
    """
    Collects filter rules for a directory tree and answers exclusion queries.

    Rules may be added directly with add_patterns() or loaded from every filter file
    under the root directory with load_patterns(). Rules from deeper directories are
    ordered after shallower ones, and the last rule that hits a path decides.
    """

    def __init__(self, root_dir: str, casefold: bool = False, filter_file: str = DEFAULT_FILTER_FILE) -> None:
        self.root_dir = os.path.abspath(root_dir)
        # Whether matching should be case-insensitive.
        self.casefold = casefold
        # Name of the per-directory files holding rules.
        self.filter_file = filter_file
        self.patterns: List[FilterPattern] = []

    def add_patterns(self, lines: Iterable[str], source_dir: str = "") -> None:
        """
        Parses rule lines and appends the resulting rules.

        Args:
            lines: Raw lines, as read from a filter file or given on the command line.
            source_dir: Directory (relative to root_dir) the rules apply under.
        """
        for line in lines:
            line = line.rstrip('\r\n').rstrip()
            if not line or line.startswith('#'):
                continue
            self.patterns.append(FilterPattern(line, source_dir, casefold=self.casefold))

    def load_patterns(self) -> None:
        """
        Reads every filter file in the directory tree starting at root_dir.

        '.git' directories are skipped. Files that cannot be read are reported with a
        warning and skipped. Rules are ordered by the depth of the directory they came
        from, shallow first, so deeper rules override shallower ones.
        """
        collected = []
        for dirpath, dirnames, filenames in os.walk(self.root_dir):
            if '.git' in dirnames:
                dirnames.remove('.git')
            if self.filter_file not in filenames:
                continue
            rel_dir = os.path.relpath(dirpath, self.root_dir)
            if rel_dir == '.':
                rel_dir = ''
            rel_dir = rel_dir.replace(os.sep, '/')
            file_path = os.path.join(dirpath, self.filter_file)
            try:
                with open(file_path, 'r', encoding='utf-8', errors='ignore') as f:
                    lines = f.readlines()
            except OSError as e:
                logging.warning(f"Could not read filter file '{file_path}': {e}")
                continue
            collected.append((rel_dir, lines))
        # Sort by directory depth; sort() is stable so walk order is kept within a depth.
        collected.sort(key=lambda x: len(x[0].split('/')) if x[0] else 0)
        for rel_dir, lines in collected:
            self.add_patterns(lines, rel_dir)

    def should_exclude(self, path: str, is_dir: bool = False) -> bool:
        """
        Determines whether the given path should be excluded.

        Args:
            path: The file or directory path (relative to the root directory).
            is_dir: True if the path is a directory, False otherwise.

        Returns:
            True if the last rule hitting the path excludes it, False if it re-includes
            it or no rule hits.
        """
        normalized = path.replace(os.sep, '/').replace('\\', '/').strip('/')
        result: Optional[bool] = None
        for pattern in self.patterns:
            match_path = normalized
            if pattern.source_dir:
                prefix = pattern.source_dir + '/'
                if not match_path.startswith(prefix):
                    # The rule's filter file does not cover this path.
                    continue
                match_path = match_path[len(prefix):]
            if pattern.hits(match_path, is_dir):
                result = not pattern.negation
        return bool(result)

    def filter_names(self, names: Iterable[str], is_dir: bool = False) -> List[str]:
        """Returns the names that are not excluded, in their original order."""
        return [name for name in names if not self.should_exclude(name, is_dir)]
