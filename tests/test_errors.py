"""Tests for error collection and strict mode."""

import unittest

from htmlnav import HtmlNavigator, NavigatorOpts, ParseError, StrictModeError


def collect(html):
    nav = HtmlNavigator(html, collect_errors=True)
    list(nav)
    return nav.errors


class TestErrorCollection(unittest.TestCase):
    def test_no_errors_by_default(self):
        nav = HtmlNavigator("<div><span></div>")
        list(nav)
        assert nav.errors == []

    def test_mismatched_end_tag(self):
        errors = collect("<div><span></div>")
        assert [e.code for e in errors] == ["mismatched-end-tag"]
        assert "span" in errors[0].message

    def test_unmatched_end_tag(self):
        assert [e.code for e in collect("</p>")] == ["unmatched-end-tag"]

    def test_dropped_attribute(self):
        errors = collect("<input disabled>")
        assert [e.code for e in errors] == ["dropped-attribute"]

    def test_eof_in_tag(self):
        assert [e.code for e in collect("<a href")] == ["eof-in-tag"]

    def test_eof_in_comment(self):
        assert [e.code for e in collect("<!-- open")] == ["eof-in-comment"]

    def test_well_formed_markup_has_no_errors(self):
        assert collect('<!DOCTYPE html><html><body class="x"><br><p>t</p></body></html>') == []

    def test_error_has_line_and_column(self):
        errors = collect("<div>\n<span>\n</div>")
        assert len(errors) == 1
        assert errors[0].line == 3
        assert errors[0].column > 0

    def test_opts_enable_collection(self):
        nav = HtmlNavigator("</p>", NavigatorOpts(collect_errors=True))
        nav.descend()
        assert len(nav.errors) == 1
        assert all(isinstance(e, ParseError) for e in nav.errors)


class TestStrictMode(unittest.TestCase):
    def test_strict_mode_raises(self):
        nav = HtmlNavigator("<div><span></div>", strict=True)
        nav.descend()
        nav.descend()
        with self.assertRaises(StrictModeError) as ctx:
            nav.descend()
        assert isinstance(ctx.exception.error, ParseError)
        assert ctx.exception.error.code == "mismatched-end-tag"

    def test_strict_mode_allows_clean_markup(self):
        nav = HtmlNavigator("<p>ok</p>", strict=True)
        assert [tag.name for tag in nav] == ["p"]


class TestParseError(unittest.TestCase):
    def test_str_and_equality(self):
        error = ParseError("eof-in-tag", line=1, column=4, message="input ended")
        assert str(error) == "(1,4): eof-in-tag - input ended"
        assert error == ParseError("eof-in-tag", line=1, column=4)
        assert str(ParseError("eof-in-tag")) == "eof-in-tag"


class TestDebugLogging(unittest.TestCase):
    def test_debug_messages_are_logged(self):
        with self.assertLogs("htmlnav.navigator", level="DEBUG") as logs:
            nav = HtmlNavigator("<div><span></div>", debug=True)
            list(nav)
        assert any("force-closed <span>" in line for line in logs.output)

    def test_debug_off_is_silent(self):
        nav = HtmlNavigator("<p></p>")
        with self.assertNoLogs("htmlnav.navigator", level="DEBUG"):
            list(nav)


if __name__ == "__main__":
    unittest.main()
