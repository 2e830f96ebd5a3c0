# test_org_parser.py
#
# Run:
#   python -m unittest -v

import unittest

from config_loader import DEFAULT_CONFIG
from org_parser import (
    OrgParseError,
    count_blank_lines,
    extract_heading_tags,
    is_keyword,
    optional,
    parse_headline,
    skip_empty_lines,
    take_line,
    take_one_word,
    take_space,
)


class TestPrimitives(unittest.TestCase):
    def test_take_line_splits_at_newline(self):
        self.assertEqual(take_line("first\nsecond"), ("second", "first"))

    def test_take_line_drops_carriage_return(self):
        self.assertEqual(take_line("first\r\nsecond"), ("second", "first"))

    def test_take_line_without_newline_takes_everything(self):
        self.assertEqual(take_line("only"), ("", "only"))
        self.assertEqual(take_line(""), ("", ""))

    def test_take_space_requires_at_least_one(self):
        self.assertEqual(take_space(" \tword"), ("word", " \t"))
        with self.assertRaises(OrgParseError) as ctx:
            take_space("word")
        self.assertEqual(ctx.exception.kind, "space")

    def test_take_space_does_not_cross_newlines(self):
        with self.assertRaises(OrgParseError):
            take_space("\nword")

    def test_take_one_word(self):
        self.assertEqual(take_one_word("TODO rest"), (" rest", "TODO"))
        self.assertEqual(take_one_word("[#A]\nnext"), ("\nnext", "[#A]"))
        with self.assertRaises(OrgParseError):
            take_one_word(" leading")

    def test_count_blank_lines(self):
        self.assertEqual(count_blank_lines("\n  \n\t\ntext\n"), ("text\n", 3))
        self.assertEqual(count_blank_lines("text"), ("text", 0))
        self.assertEqual(count_blank_lines("   "), ("", 1))

    def test_skip_empty_lines_keeps_indentation_of_content(self):
        self.assertEqual(skip_empty_lines("\n\n   :A: b"), "   :A: b")

    def test_optional_returns_default_and_untouched_input(self):
        parser = optional(take_space, "none")
        self.assertEqual(parser("word"), ("word", "none"))
        self.assertEqual(parser("  word"), ("word", "  "))


class TestIsKeyword(unittest.TestCase):
    def test_matches_either_vocabulary(self):
        self.assertTrue(is_keyword("TODO", ["TODO"], ["DONE"]))
        self.assertTrue(is_keyword("DONE", ["TODO"], ["DONE"]))

    def test_is_case_sensitive(self):
        self.assertFalse(is_keyword("ToDO", ["TODO"], ["DONE"]))
        self.assertFalse(is_keyword("done", ["TODO"], ["DONE"]))

    def test_empty_vocabularies_disable_keywords(self):
        self.assertFalse(is_keyword("TODO", [], []))


class TestExtractHeadingTags(unittest.TestCase):
    def test_trailing_tag_block(self):
        self.assertEqual(extract_heading_tags("Title :tag:a2%:"), ("Title", ["tag", "a2%"]))

    def test_keeps_duplicates_and_order(self):
        self.assertEqual(extract_heading_tags("T :b:a:b:"), ("T", ["b", "a", "b"]))

    def test_missing_closing_colon(self):
        self.assertEqual(extract_heading_tags("Title :tag:a2%"), ("Title :tag:a2%", []))

    def test_missing_opening_colon(self):
        self.assertEqual(extract_heading_tags("Title tag:a2%:"), ("Title tag:a2%:", []))

    def test_block_must_be_longer_than_two_chars(self):
        self.assertEqual(extract_heading_tags("Title ::"), ("Title ::", []))

    def test_tag_block_without_preceding_space(self):
        self.assertEqual(extract_heading_tags(":tag:"), (":tag:", []))


class TestParseHeadline(unittest.TestCase):
    def test_full_headline(self):
        self.assertEqual(
            parse_headline("**** DONE [#A] COMMENT Title :tag:a2%:", DEFAULT_CONFIG),
            ("", (4, "DONE", "A", "COMMENT Title", ["tag", "a2%"])),
        )

    def test_keyword_must_match_case(self):
        self.assertEqual(
            parse_headline("**** ToDO [#A] COMMENT Title", DEFAULT_CONFIG),
            ("", (4, None, None, "ToDO [#A] COMMENT Title", [])),
        )

    def test_unknown_keyword_keeps_priority_in_title(self):
        self.assertEqual(
            parse_headline("**** T0DO [#A] COMMENT Title", DEFAULT_CONFIG),
            ("", (4, None, None, "T0DO [#A] COMMENT Title", [])),
        )

    def test_numeric_priority_is_not_a_cookie(self):
        self.assertEqual(
            parse_headline("**** DONE [#1] COMMENT Title", DEFAULT_CONFIG),
            ("", (4, "DONE", None, "[#1] COMMENT Title", [])),
        )

    def test_lowercase_priority_is_not_a_cookie(self):
        self.assertEqual(
            parse_headline("**** DONE [#a] COMMENT Title", DEFAULT_CONFIG),
            ("", (4, "DONE", None, "[#a] COMMENT Title", [])),
        )

    def test_priority_must_be_a_whole_word(self):
        self.assertEqual(
            parse_headline("* TODO [#A]x Title", DEFAULT_CONFIG),
            ("", (1, "TODO", None, "[#A]x Title", [])),
        )

    def test_priority_without_keyword(self):
        self.assertEqual(
            parse_headline("* [#A] Title", DEFAULT_CONFIG),
            ("", (1, None, "A", "Title", [])),
        )

    def test_tags_without_trailing_colon(self):
        self.assertEqual(
            parse_headline("**** Title :tag:a2%", DEFAULT_CONFIG),
            ("", (4, None, None, "Title :tag:a2%", [])),
        )

    def test_tags_without_leading_colon(self):
        self.assertEqual(
            parse_headline("**** Title tag:a2%:", DEFAULT_CONFIG),
            ("", (4, None, None, "Title tag:a2%:", [])),
        )

    def test_vocabulary_without_done(self):
        cfg = DEFAULT_CONFIG.with_keywords(done_keywords=())
        self.assertEqual(
            parse_headline("**** DONE Title", cfg),
            ("", (4, None, None, "DONE Title", [])),
        )

    def test_custom_todo_keyword(self):
        cfg = DEFAULT_CONFIG.with_keywords(todo_keywords=("TASK",))
        self.assertEqual(
            parse_headline("**** TASK [#A] Title", cfg),
            ("", (4, "TASK", "A", "Title", [])),
        )

    def test_level_equals_star_count(self):
        for n in range(1, 12):
            with self.subTest(n=n):
                _, (level, *_rest) = parse_headline("*" * n + " Title", DEFAULT_CONFIG)
                self.assertEqual(level, n)

    def test_bare_stars(self):
        self.assertEqual(parse_headline("***", DEFAULT_CONFIG), ("", (3, None, None, "", [])))

    def test_keyword_only(self):
        self.assertEqual(parse_headline("* TODO", DEFAULT_CONFIG), ("", (1, "TODO", None, "", [])))

    def test_stops_at_end_of_line(self):
        rest, (_, _, _, raw, tags) = parse_headline(
            "* Title :a:\r\nSCHEDULED: <2020-01-01 Wed>\n", DEFAULT_CONFIG
        )
        self.assertEqual(raw, "Title")
        self.assertEqual(tags, ["a"])
        self.assertEqual(rest, "SCHEDULED: <2020-01-01 Wed>\n")

    def test_keyword_is_not_read_from_next_line(self):
        rest, (_, keyword, _, raw, _) = parse_headline("*\nTODO", DEFAULT_CONFIG)
        self.assertIsNone(keyword)
        self.assertEqual(raw, "")
        self.assertEqual(rest, "TODO")

    def test_title_whitespace_is_trimmed(self):
        _, (_, _, _, raw, _) = parse_headline("**   Title   ", DEFAULT_CONFIG)
        self.assertEqual(raw, "Title")

    def test_tag_round_trip(self):
        for raw, tags in [("Title", ["a"]), ("Two words", ["x", "y", "x"]), ("a:b", ["c%", "d"])]:
            with self.subTest(raw=raw, tags=tags):
                line = f"* {raw} :{':'.join(tags)}:"
                _, (_, _, _, got_raw, got_tags) = parse_headline(line, DEFAULT_CONFIG)
                self.assertEqual(got_raw, raw)
                self.assertEqual(got_tags, tags)

    def test_no_stars_is_a_contract_error(self):
        with self.assertRaises(ValueError):
            parse_headline("Title", DEFAULT_CONFIG)


if __name__ == "__main__":
    unittest.main(verbosity=2)
