"""Stack invariants over randomly assembled markup."""

import random
import unittest

from htmlnav import HtmlNavigator

FRAGMENTS = [
    "<div>", "</div>", "<p class='a b'>", "</p>", "<span id=\"s\">", "</span>", "<br>", "<img src=x/>",
    "<li>", "</ul>", "<ul>", "text", " ", "<", "</>", "<!-- c -->", "<script>if (a<b) x='</p>'</script>",
    "<b", ">", "\"", "</SPAN>", "<input disabled>", "<!DOCTYPE html>", "</nomatch>",
]


def random_markup(rng):
    return "".join(rng.choice(FRAGMENTS) for _ in range(rng.randint(1, 25)))


class TestInvariants(unittest.TestCase):
    def test_stack_invariants_hold(self):
        rng = random.Random(1234)
        for _ in range(300):
            html = random_markup(rng)
            nav = HtmlNavigator(html)
            while not nav.done:
                tag = nav.descend()
                if tag is not None:
                    if tag.parent is None:
                        assert tag.depth == 1, html
                    else:
                        assert tag.depth == tag.parent.depth + 1, html
                    if tag.self_closing:
                        assert tag.closed, html
                        assert nav.top is not tag, html
                node = nav.top
                while node is not None:
                    assert not node.closed, html
                    node = node.parent
            assert nav.descend() is None

    def test_unmatched_close_always_empties_stack(self):
        rng = random.Random(99)
        for _ in range(50):
            names = [rng.choice(["a", "b", "div", "p"]) for _ in range(rng.randint(1, 8))]
            nav = HtmlNavigator("".join(f"<{name}>" for name in names))
            opened = list(nav)
            assert nav.ascend("nothing-like-this") is False
            assert nav.top is None
            assert all(tag.closed for tag in opened)


if __name__ == "__main__":
    unittest.main()
