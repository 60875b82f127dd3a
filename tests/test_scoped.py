"""
Comment splitting and scoped section tests.
"""
from __future__ import annotations

import unittest

from ctxreplace import ConfigurationError, scoped_replace_all
from ctxreplace.processing.comment_splitter import replace_outside_comments, split_outside_comments
from ctxreplace.processing.scoped import scoped_transform


# --------------------------------------------------------------------------- #
#  1. Comment splitting                                                       #
# --------------------------------------------------------------------------- #
class CommentSplitterTests(unittest.TestCase):
    def test_alternating_segments(self) -> None:
        segs = split_outside_comments("a // c\nb /* d */ e")
        self.assertEqual(
            [(s.content, s.is_comment) for s in segs],
            [("a ", False), ("// c", True), ("\nb ", False), ("/* d */", True), (" e", False)],
        )

    def test_segments_cover_text(self) -> None:
        text = "x /* a\nb */ y // z\n/* */"
        self.assertEqual("".join(s.content for s in split_outside_comments(text)), text)

    def test_leading_comment_yields_empty_code_run(self) -> None:
        segs = split_outside_comments("//x")
        self.assertEqual([(s.content, s.is_comment) for s in segs], [("", False), ("//x", True), ("", False)])

    def test_block_comment_is_non_greedy(self) -> None:
        segs = split_outside_comments("/* a */ b /* c */")
        self.assertEqual([s.content for s in segs if s.is_comment], ["/* a */", "/* c */"])

    def test_unclosed_block_comment_is_plain_text(self) -> None:
        segs = split_outside_comments("/* x")
        self.assertEqual([(s.content, s.is_comment) for s in segs], [("/* x", False)])

    def test_comment_markers_in_strings_are_not_special(self) -> None:
        segs = split_outside_comments('url = "http://x"')
        self.assertEqual([s.content for s in segs if s.is_comment], ['//x"'])

    def test_transform_only_touches_code(self) -> None:
        out = replace_outside_comments("<1> // <2>\n<3>", lambda s: s.replace("<", "["))
        self.assertEqual(out, "[1> // <2>\n[3>")


# --------------------------------------------------------------------------- #
#  2. Scoped sections                                                         #
# --------------------------------------------------------------------------- #
class ScopedReplaceTests(unittest.TestCase):
    def test_only_in_scope_blocks_are_rewritten(self) -> None:
        text = "outside <1> SCOPE_START inner <2> SCOPE_END outside <3>"
        self.assertEqual(
            scoped_replace_all(text, "SCOPE_START", "SCOPE_END", "<", ">", "[%s]"),
            "outside <1> SCOPE_START inner [2] SCOPE_END outside <3>",
        )

    def test_line_comment_is_skipped(self) -> None:
        text = "S// block <1> ignored\n<2>E"
        self.assertEqual(
            scoped_replace_all(text, "S", "E", "<", ">", "[%s]"),
            "S// block <1> ignored\n[2]E",
        )

    def test_block_comment_is_skipped(self) -> None:
        text = "S /* <1>\n<2> */ <3> E"
        self.assertEqual(
            scoped_replace_all(text, "S", "E", "<", ">", "[%s]"),
            "S /* <1>\n<2> */ [3] E",
        )

    def test_blocks_do_not_cross_comments(self) -> None:
        text = "S <a // b> \n c> E"
        self.assertEqual(scoped_replace_all(text, "S", "E", "<", ">", "[%s]"), "S [a ]// b> \n c> E")

    def test_missing_end_marker_is_synthesized(self) -> None:
        self.assertEqual(
            scoped_replace_all("a START <1>", "START", "END", "<", ">", "[%s]"),
            "a START [1] END",
        )

    def test_sections_processed_left_to_right(self) -> None:
        self.assertEqual(scoped_replace_all("S<1>E<2>S<3>E", "S", "E", "<", ">", "[%s]"), "S[1]E<2>S[3]E")

    def test_no_section_returns_text(self) -> None:
        self.assertEqual(scoped_replace_all("plain <1>", "S{", "}S", "<", ">", "[%s]"), "plain <1>")

    def test_default_pattern_unwraps(self) -> None:
        self.assertEqual(scoped_replace_all("[<a>]", "[", "]", "<", ">"), "[a]")

    def test_empty_markers_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            scoped_replace_all("x", "", "E", "<", ">")
        with self.assertRaises(ConfigurationError):
            scoped_transform("x", "S", "", str.upper)

    def test_configuration_checked_without_sections(self) -> None:
        with self.assertRaises(ConfigurationError):
            scoped_replace_all("no sections", "S{", "}S", ["<"], [])

    def test_scoped_transform_with_custom_run_rewrite(self) -> None:
        self.assertEqual(scoped_transform("a[b//c\nd]e", "[", "]", str.upper), "a[B//c\nD]e")


if __name__ == "__main__":
    unittest.main()
