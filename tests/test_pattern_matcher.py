"""
Pattern matching and escape detection tests.

• Delimiter classification (literal vs. /regex/flags, malformed bodies).
• Match reporting: positions, capture groups, unmatched optional groups.
• Backslash parity rules.
"""
from __future__ import annotations

import unittest

from ctxreplace.core.models import GroupCapture, LiteralDelimiter, PatternDelimiter
from ctxreplace.processing.escape import is_escaped
from ctxreplace.processing.pattern_matcher import classify_delimiter, find, is_regex_shaped


# --------------------------------------------------------------------------- #
#  1. Classification                                                          #
# --------------------------------------------------------------------------- #
class ClassificationTests(unittest.TestCase):
    def test_regex_shapes(self) -> None:
        self.assertTrue(is_regex_shaped("/a+/"))
        self.assertTrue(is_regex_shaped("/a+/i"))
        self.assertTrue(is_regex_shaped("#x#ms"))
        self.assertTrue(is_regex_shaped("~\\d~u"))

    def test_non_regex_shapes(self) -> None:
        self.assertFalse(is_regex_shaped("<"))
        self.assertFalse(is_regex_shaped("//"))
        self.assertFalse(is_regex_shaped("/ab"))          # closing delimiter missing
        self.assertFalse(is_regex_shaped("/a/q"))         # unknown modifier
        self.assertFalse(is_regex_shaped("<?php"))

    def test_literal_variant(self) -> None:
        d = classify_delimiter("{{")
        self.assertIsInstance(d, LiteralDelimiter)
        self.assertEqual(d.source, "{{")

    def test_pattern_variant_is_compiled_once(self) -> None:
        d = classify_delimiter("/ab+/i")
        self.assertIsInstance(d, PatternDelimiter)
        self.assertFalse(d.is_malformed)
        self.assertTrue(d.regex.match("ABB"))

    def test_malformed_pattern_matches_nothing(self) -> None:
        with self.assertLogs("ctxreplace.processing.pattern", level="WARNING"):
            d = classify_delimiter("/(/")
        self.assertIsInstance(d, PatternDelimiter)
        self.assertTrue(d.is_malformed)
        self.assertIsNone(find("((((", d))

    def test_unescaped_delimiter_in_body_is_malformed(self) -> None:
        with self.assertLogs("ctxreplace.processing.pattern", level="WARNING"):
            d = classify_delimiter("/a/b/")
        self.assertTrue(d.is_malformed)
        self.assertIsNone(find("x a/b y", d))

    def test_escaped_delimiter_in_body(self) -> None:
        d = classify_delimiter(r"/a\/b/")
        self.assertFalse(d.is_malformed)
        self.assertEqual(find("x a/b y", d).value, "a/b")

    def test_escaped_closing_delimiter_is_malformed(self) -> None:
        with self.assertLogs("ctxreplace.processing.pattern", level="WARNING"):
            d = classify_delimiter("/a\\/")
        self.assertTrue(d.is_malformed)


# --------------------------------------------------------------------------- #
#  1b. PCRE modifier translation                                              #
# --------------------------------------------------------------------------- #
class ModifierTranslationTests(unittest.TestCase):
    def test_ungreedy_makes_greedy_quantifiers_lazy(self) -> None:
        self.assertEqual(find("<a><b>", classify_delimiter("/<.*>/U")).value, "<a>")
        self.assertEqual(find("aaa", classify_delimiter("/a{1,3}/U")).value, "a")
        self.assertEqual(find("aaa", classify_delimiter("/a+/U")).value, "a")

    def test_ungreedy_makes_lazy_quantifiers_greedy(self) -> None:
        self.assertEqual(find("<a><b>", classify_delimiter("/<.*?>/U")).value, "<a><b>")

    def test_ungreedy_leaves_classes_and_groups_alone(self) -> None:
        d = classify_delimiter("/(?:[*+?]x)+/U")
        self.assertFalse(d.is_malformed)
        self.assertEqual(find("*x+x", d).value, "*x")
        self.assertEqual(find("ab", classify_delimiter("/(?<n>a)b/U")).groups["n"].value, "a")

    def test_dollar_end_only(self) -> None:
        self.assertIsNotNone(find("a\n", classify_delimiter("/a$/")))
        self.assertIsNone(find("a\n", classify_delimiter("/a$/D")))
        self.assertEqual(find("xa", classify_delimiter("/a$/D")).start, 1)

    def test_dollar_end_only_ignored_in_multiline_mode(self) -> None:
        self.assertEqual(find("a\nb", classify_delimiter("/a$/mD")).start, 0)

    def test_escaped_and_class_dollar_stay_literal(self) -> None:
        self.assertEqual(find("a$b", classify_delimiter(r"/a\$b/D")).value, "a$b")
        self.assertEqual(find("a$", classify_delimiter("/a[$]/D")).value, "a$")


# --------------------------------------------------------------------------- #
#  2. Matching                                                                #
# --------------------------------------------------------------------------- #
class FindTests(unittest.TestCase):
    def test_literal_from_offset(self) -> None:
        m = find("abcabc", LiteralDelimiter("c"), 3)
        self.assertEqual((m.start, m.end, m.length, m.value), (5, 6, 1, "c"))
        self.assertEqual(dict(m.groups), {})

    def test_literal_no_match(self) -> None:
        self.assertIsNone(find("abc", LiteralDelimiter("z")))
        self.assertIsNone(find("abc", LiteralDelimiter("a"), 1))

    def test_regex_groups_and_null_groups(self) -> None:
        d = classify_delimiter(r"/(\d+)(x)?/")
        m = find("ab 12 cd", d)
        self.assertEqual((m.start, m.end, m.value), (3, 5, "12"))
        self.assertEqual(m.groups["group_1"], GroupCapture("12", 3, 5, 2))
        self.assertEqual(m.groups["group_2"], GroupCapture(None, None, None, 0))

    def test_named_groups_pcre_syntax(self) -> None:
        d = classify_delimiter(r"/(?<num>\d+)/")
        m = find("a7", d)
        self.assertEqual(m.groups["num"].value, "7")
        self.assertEqual(m.groups["group_1"].start, 1)

    def test_case_insensitive_modifier(self) -> None:
        m = find("xabc", classify_delimiter("/ABC/i"))
        self.assertEqual(m.start, 1)

    def test_search_starts_at_offset(self) -> None:
        m = find("1a2", classify_delimiter(r"/\d/"), 1)
        self.assertEqual(m.start, 2)

    def test_anchored_modifier(self) -> None:
        d = classify_delimiter("/b/A")
        self.assertIsNone(find("ab", d, 0))
        self.assertEqual(find("ab", d, 1).start, 1)

    def test_alternate_delimiter_character(self) -> None:
        m = find("path/to/file", classify_delimiter("#/to/#"))
        self.assertEqual((m.start, m.value), (4, "/to/"))


# --------------------------------------------------------------------------- #
#  3. Escapes                                                                 #
# --------------------------------------------------------------------------- #
class EscapeTests(unittest.TestCase):
    def test_single_backslash_escapes(self) -> None:
        self.assertTrue(is_escaped("a\\<", 2))

    def test_double_backslash_does_not_escape(self) -> None:
        self.assertFalse(is_escaped("a\\\\<", 3))

    def test_triple_backslash_escapes(self) -> None:
        self.assertTrue(is_escaped("\\\\\\<", 3))

    def test_position_zero_is_never_escaped(self) -> None:
        self.assertFalse(is_escaped("<", 0))

    def test_only_contiguous_run_counts(self) -> None:
        self.assertFalse(is_escaped("\\a<", 2))


if __name__ == "__main__":
    unittest.main()
