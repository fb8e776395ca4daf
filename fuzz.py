#!/usr/bin/env python3
"""
Random fuzzer for the tag navigator.
Generates malformed markup and checks that the navigator neither crashes nor
breaks its stack invariants while walking it.
"""

import argparse
import random
import string
import sys
import time
import traceback

from htmlnav import HtmlNavigator

TAGS = [
    "div", "span", "p", "a", "img", "table", "tr", "td", "ul", "li", "b", "i", "em",
    "script", "style", "br", "meta", "hr", "input", "h1", "h2", "section", "my-widget",
]

ATTRIBUTES = ["id", "class", "href", "src", "data-x", "aria-label", "disabled", "xml.lang"]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_whitespace():
    ws = [" ", "\t", "\n", "\r", "\f", ""]
    return "".join(random.choices(ws, k=random.randint(0, 3)))


def fuzz_tag_name():
    strategies = [
        lambda: random.choice(TAGS),
        lambda: random.choice(TAGS).upper(),
        lambda: random.choice(TAGS) + random_string(1, 3),
        lambda: "",
        lambda: "0" + random.choice(TAGS),
        lambda: " " + random.choice(TAGS),
    ]
    return random.choice(strategies)()


def fuzz_attribute():
    name = random.choice([lambda: random.choice(ATTRIBUTES), lambda: random_string(1, 8), lambda: "=", lambda: '"'])()
    value = random.choice([lambda: random_string(0, 15), lambda: "<b>", lambda: "a > b", lambda: ""])()
    quote_start, quote_end = random.choice(
        [('="', '"'), ("='", "'"), ("=", ""), ("", ""), ('="', ""), ("==", "")]
    )
    return f"{name}{quote_start}{value}{quote_end}"


def fuzz_open_tag():
    attrs = " ".join(fuzz_attribute() for _ in range(random.randint(0, 4)))
    closing = random.choice([">", "/>", " >", "/ >", "", ">>"])
    return f"<{fuzz_tag_name()}{random_whitespace()}{attrs}{closing}"


def fuzz_close_tag():
    tag = fuzz_tag_name()
    return random.choice([f"</{tag}>", f"</ {tag}>", f"</{tag} >", f"</{tag}", f"</{tag} garbage>", "</>"])


def fuzz_comment():
    content = random_string(0, 20)
    return random.choice([f"<!--{content}-->", f"<!-{content}->", f"<!--{content}", "<!---->", "<!DOCTYPE html>"])


def fuzz_raw_text():
    tag = random.choice(["script", "style"])
    body = random.choice(['var s = "<div>";', "a < b && c > d", f"</{tag}x>", "</div>", random_string()])
    end = random.choice([f"</{tag}>", f"</{tag.upper()}>", ""])
    return f"<{tag}>{body}{end}"


def fuzz_text():
    return random.choice([random_string(0, 30), "<", "< 3", "&amp;", "\r\n"])


def generate_fuzzed_html():
    parts = []
    for _ in range(random.randint(1, 30)):
        element_type = random.choices(
            [fuzz_open_tag, fuzz_close_tag, fuzz_comment, fuzz_raw_text, fuzz_text],
            weights=[30, 20, 5, 5, 20],
        )[0]
        parts.append(element_type())
    return "".join(parts)


def check_invariants(html):
    """Walk ``html`` to the end and return a list of invariant violations."""
    problems = []
    nav = HtmlNavigator(html, collect_errors=True)
    steps = 0
    while not nav.done:
        tag = nav.descend()
        steps += 1
        if steps > len(html) + 2:
            problems.append("navigator made no progress")
            break
        if tag is not None:
            expected = 1 if tag.parent is None else tag.parent.depth + 1
            if tag.depth != expected:
                problems.append(f"{tag!r} has depth {tag.depth}, expected {expected}")
            if tag.self_closing and (not tag.closed or nav.top is tag):
                problems.append(f"self-closing {tag!r} is open or on the stack")
        node = nav.top
        while node is not None:
            if node.closed:
                problems.append(f"closed {node!r} is still on the stack")
                break
            node = node.parent
    if nav.descend() is not None:
        problems.append("tag produced after end of input")
    return problems


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    if seed is not None:
        random.seed(seed)

    failures = []
    print(f"Fuzzing htmlnav with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        html = generate_fuzzed_html()
        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")
        try:
            problems = check_invariants(html)
        except Exception as e:
            problems = [f"crash: {e}\n{traceback.format_exc()}"]
        if problems:
            failures.append({"test_num": i, "html": html, "problems": problems})
            if verbose:
                print(f"  FAIL: Test {i}: {problems[0]}")

    elapsed_total = time.time() - start_time

    print(f"\n{'='*60}")
    print("FUZZING RESULTS: htmlnav")
    print(f"{'='*60}")
    print(f"Total tests:    {num_tests}")
    print(f"Failures:       {len(failures)}")
    print(f"Total time:     {elapsed_total:.2f}s")

    for failure in failures[:10]:
        print(f"\nTest #{failure['test_num']}:")
        print(f"  HTML: {failure['html'][:200]!r}")
        for problem in failure["problems"][:3]:
            print(f"  {problem}")

    if save_failures and failures:
        filename = f"fuzz_failures_htmlnav_{int(time.time())}.txt"
        with open(filename, "w") as f:
            f.write(f"Seed: {seed}\n\n")
            for failure in failures:
                f.write(f"=== FAILURE #{failure['test_num']} ===\n")
                f.write(f"HTML:\n{failure['html']}\n")
                f.write("\n".join(failure["problems"]) + "\n\n")
        print(f"\nFailures saved to {filename}")

    return not failures


def main():
    parser = argparse.ArgumentParser(description="Fuzz the tag navigator with malformed markup")
    parser.add_argument("--num-tests", "-n", type=int, default=1000, help="Number of test cases (default: 1000)")
    parser.add_argument("--seed", "-s", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--save-failures", action="store_true", help="Save failures to a file")
    parser.add_argument("--sample", type=int, metavar="N", help="Just print N sample documents (no scanning)")
    args = parser.parse_args()

    if args.sample:
        if args.seed:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i+1} ===")
            print(generate_fuzzed_html())
            print()
        return

    success = run_fuzzer(args.num_tests, seed=args.seed, verbose=args.verbose, save_failures=args.save_failures)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
