#!/usr/bin/env python
"""
Wildcard Matching

This module provides a single-pass wildcard matcher for glob-style patterns. It supports
two metacharacters:
  - '?' matches exactly one character.
  - '*' matches zero or more characters (including '/', there is no notion of paths here).

Every other character is a literal and must be matched exactly. There is no escaping
mechanism, so a literal '?' or '*' cannot be matched as a plain character.

Instead of backtracking, the matcher first classifies the pattern by the metacharacters it
contains and picks one of four strategies:

  PATTERN_EXACT   - No metacharacters. Lengths must agree, then plain equality.
  PATTERN_SINGLE  - Only '?'. Lengths must agree, then index-wise equality where '?' always matches.
  PATTERN_STAR    - Only '*'. The literal head (before the first '*') and tail (after the last '*')
                    are trimmed against the ends of the text, then the literal segments between
                    the stars are placed left to right in what remains of the text.
  PATTERN_MIXED   - Both. Same as PATTERN_STAR, except '?' inside a literal run matches any
                    single character.

Each segment is placed at the leftmost position at or after the end of the previous one.
Because every segment has a fixed length, committing to the leftmost placement never rejects
a text that some other placement would accept.

Case-insensitive matching lower-cases both strings before classification; it is not a
separate code path.
"""

from typing import Callable, Optional

# Pattern classification constants. Bit 1 is set when the pattern contains '?',
# bit 2 when it contains '*'.
PATTERN_EXACT = 0           # Literal characters only.
PATTERN_SINGLE = 1          # '?' but no '*'.
PATTERN_STAR = 2            # '*' but no '?'.
PATTERN_MIXED = 3           # Both '?' and '*'.

SINGLE_WILDCARD = '?'
MULTI_WILDCARD = '*'

CharPredicate = Callable[[str, str], bool]


def literal_equal(p_ch: str, t_ch: str) -> bool:
    """Return True if the pattern character equals the text character."""
    return p_ch == t_ch


def wildcard_equal(p_ch: str, t_ch: str) -> bool:
    """Return True if the pattern character equals the text character or is '?'."""
    return p_ch == t_ch or p_ch == SINGLE_WILDCARD


def classify(pattern: str) -> int:
    """
    Classify a pattern by the metacharacters it contains.

    The pattern is scanned once; the scan stops early as soon as both
    metacharacters have been seen.

    Parameters:
        pattern (str): The wildcard pattern.

    Returns:
        int: One of PATTERN_EXACT, PATTERN_SINGLE, PATTERN_STAR or PATTERN_MIXED.
    """
    kind = PATTERN_EXACT
    for ch in pattern:
        if ch == SINGLE_WILDCARD:
            kind |= PATTERN_SINGLE
        elif ch == MULTI_WILDCARD:
            kind |= PATTERN_STAR
        if kind == PATTERN_MIXED:
            break
    return kind


def find_segment(text: str, segment: str, start: int, same: CharPredicate) -> int:
    """
    Find the leftmost occurrence of a literal segment in text at or after start.

    Parameters:
        text (str): The text to search (the untrimmed middle of the subject).
        segment (str): A literal run taken from between two '*' characters.
        start (int): The first offset the segment may begin at.
        same (CharPredicate): Compares one pattern character with one text character.

    Returns:
        int: The offset of the occurrence, or -1 if the segment does not occur.
    """
    for offset in range(start, len(text) - len(segment) + 1):
        for i, p_ch in enumerate(segment):
            if not same(p_ch, text[offset + i]):
                break
        else:
            return offset
    return -1


def match_fixed(text: str, pattern: str, same: CharPredicate) -> bool:
    """
    Match a pattern without '*' character by character.

    Patterns without '*' can only match texts of exactly the same length, so the
    lengths are compared before any character is examined.
    """
    if len(text) != len(pattern):
        return False
    for p_ch, t_ch in zip(pattern, text):
        if not same(p_ch, t_ch):
            return False
    return True


def match_star(text: str, pattern: str, same: CharPredicate) -> bool:
    """
    Match a pattern containing at least one '*'.

    The literal runs before the first '*' and after the last '*' are anchored to the
    start and end of the text and compared directly. The pattern between those two
    stars is split into literal segments, and each segment is placed in the remaining
    middle of the text at the leftmost position at or after the end of the previous one.

    Parameters:
        text (str): The text to test.
        pattern (str): The wildcard pattern; must contain '*'.
        same (CharPredicate): literal_equal for PATTERN_STAR, wildcard_equal for PATTERN_MIXED.

    Returns:
        bool: True if the text matches the pattern.
    """
    first = pattern.index(MULTI_WILDCARD)
    last = pattern.rindex(MULTI_WILDCARD)
    head = first
    tail = len(pattern) - 1 - last

    # Both anchors have to fit into the text without overlapping.
    if head + tail > len(text):
        return False

    # Trim the head: everything before the first '*'.
    for i in range(head):
        if not same(pattern[i], text[i]):
            return False

    # Trim the tail: everything after the last '*', compared from the end backward.
    for i in range(1, tail + 1):
        if not same(pattern[-i], text[-i]):
            return False

    middle_text = text[head:len(text) - tail]
    # Adjacent stars produce empty segments, which constrain nothing.
    segments = [seg for seg in pattern[first + 1:last].split(MULTI_WILDCARD) if seg]

    cursor = 0
    for segment in segments:
        found = find_segment(middle_text, segment, cursor, same)
        if found < 0:
            return False
        cursor = found + len(segment)
    return True


def matches(text: Optional[str], pattern: Optional[str], ignore_case: bool = False) -> bool:
    """
    Test whether text conforms to a wildcard pattern.

    Parameters:
        text (Optional[str]): The text to test. None never matches.
        pattern (Optional[str]): The wildcard pattern. None never matches.
        ignore_case (bool): If True, both strings are lower-cased before matching.

    Returns:
        bool: True if the text matches the pattern, False otherwise (including when
              either argument is None).
    """
    if text is None or pattern is None:
        return False

    if ignore_case:
        text = text.lower()
        pattern = pattern.lower()

    kind = classify(pattern)
    if kind == PATTERN_EXACT:
        return match_fixed(text, pattern, literal_equal)
    elif kind == PATTERN_SINGLE:
        return match_fixed(text, pattern, wildcard_equal)
    elif kind == PATTERN_STAR:
        return match_star(text, pattern, literal_equal)
    else:
        return match_star(text, pattern, wildcard_equal)


def matches_ignore_case(text: Optional[str], pattern: Optional[str]) -> bool:
    """Case-insensitive form of matches()."""
    return matches(text, pattern, ignore_case=True)
