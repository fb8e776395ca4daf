import unittest

from htmlnav import AttributeScanner, CharSource, HtmlNavigator


def scan_all(text):
    scanner = AttributeScanner(CharSource(text))
    results = []
    while True:
        result = scanner.scan()
        results.append(result)
        if result[0] in (AttributeScanner.END, AttributeScanner.EOF):
            return results


class TestAttributeScanner(unittest.TestCase):
    def test_quoted_pairs(self):
        results = scan_all(' href="x" data-id = \'7\'>')
        assert results == [
            (AttributeScanner.ATTRIBUTE, "href", "x"),
            (AttributeScanner.ATTRIBUTE, "data-id", "7"),
            (AttributeScanner.END, None, None),
        ]

    def test_value_may_contain_markup_characters(self):
        results = scan_all(' title="a > b / c">')
        assert results[0] == (AttributeScanner.ATTRIBUTE, "title", "a > b / c")

    def test_self_close(self):
        results = scan_all(' x="1"/>')
        kinds = [kind for kind, _, _ in results]
        assert kinds == [AttributeScanner.ATTRIBUTE, AttributeScanner.SELF_CLOSE, AttributeScanner.END]

    def test_bare_attribute_is_dropped_without_eating_end(self):
        kinds = [kind for kind, _, _ in scan_all(" disabled>")]
        assert kinds == [AttributeScanner.DROPPED, AttributeScanner.END]

    def test_unquoted_value_is_dropped(self):
        results = scan_all(' width=100 alt="ok">')
        assert results[0][0] == AttributeScanner.DROPPED
        assert results[1] == (AttributeScanner.ATTRIBUTE, "alt", "ok")

    def test_unterminated_value_hits_eof(self):
        results = scan_all(' title="never ends')
        assert results == [(AttributeScanner.EOF, None, None)]

    def test_name_characters(self):
        results = scan_all(' xml.lang_v-2="en">')
        assert results[0] == (AttributeScanner.ATTRIBUTE, "xml.lang_v-2", "en")


class TestTagAttributes(unittest.TestCase):
    def test_class_is_diverted(self):
        tag = HtmlNavigator('<p CLASS="  lead   intro " id="p1">').descend()
        assert tag.classes == frozenset({"lead", "intro"})
        assert dict(tag.attributes) == {"id": "p1"}

    def test_attribute_order_is_preserved(self):
        tag = HtmlNavigator('<a z="1" a="2" m="3">').descend()
        assert list(tag.attributes) == ["z", "a", "m"]

    def test_malformed_attributes_dropped_silently(self):
        tag = HtmlNavigator('<input type=text checked value="v">').descend()
        assert dict(tag.attributes) == {"value": "v"}

    def test_eof_inside_attributes_produces_no_tag(self):
        nav = HtmlNavigator('before<a href="x')
        assert nav.descend() is None
        assert nav.done is True
        assert nav.last_content == "before"
        assert nav.top is None

    def test_attributes_are_read_only(self):
        tag = HtmlNavigator('<a href="x">').descend()
        with self.assertRaises(TypeError):
            tag.attributes["href"] = "y"


if __name__ == "__main__":
    unittest.main()
