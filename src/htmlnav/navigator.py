"""Forward-only tag navigator.

The navigator reads a character source once, front to back, and reports
opening tags as they are scanned. Closing tags are not reported as values;
they pop the implicit stack of open tags rooted at ``top``. Nothing is kept
beyond that stack, so a caller can pull a handful of values out of a large
page without building a tree.

Malformed markup never raises (unless ``strict`` is on). Unbalanced close tags
force-close everything between ``top`` and the nearest matching ancestor, bad
attributes are dropped, and raw-text bodies (``<script>``) are treated as
plain text until their own close tag.
"""

import logging

from .attributes import AttributeScanner
from .constants import DECLARATION_PREFIX, RAW_TEXT_ELEMENTS, TAG_NAME_PUNCTUATION, VOID_ELEMENTS, WHITESPACE
from .source import CharSource
from .tokens import ParseError, StrictModeError, Tag

logger = logging.getLogger(__name__)

_CONTINUE = object()


def is_tag_name_char(c):
    return c is not None and (c.isalnum() or c in TAG_NAME_PUNCTUATION)


class NavigatorOpts:
    __slots__ = ("collect_errors", "raw_text_tags", "strict", "void_tags")

    def __init__(self, void_tags=None, raw_text_tags=None, collect_errors=False, strict=False):
        if void_tags is None:
            void_tags = VOID_ELEMENTS
        if raw_text_tags is None:
            raw_text_tags = RAW_TEXT_ELEMENTS
        self.void_tags = frozenset(name.lower() for name in void_tags)
        self.raw_text_tags = frozenset(name.lower() for name in raw_text_tags)
        self.collect_errors = bool(collect_errors)
        self.strict = bool(strict)


class HtmlNavigator:
    TEXT = 0
    TAG_NAME = 1
    ATTRIBUTES = 2
    CLOSE_TAG = 3
    DONE = 4

    __slots__ = (
        "_content",
        "_scanner",
        "_tag_name",
        "collect_errors",
        "done",
        "env_debug",
        "errors",
        "opts",
        "source",
        "state",
        "strict",
        "top",
    )

    def __init__(self, source, opts=None, *, collect_errors=None, strict=None, debug=False):
        if not isinstance(source, CharSource):
            source = CharSource(source)
        self.source = source
        self.opts = opts or NavigatorOpts()
        self.collect_errors = self.opts.collect_errors if collect_errors is None else bool(collect_errors)
        self.strict = self.opts.strict if strict is None else bool(strict)
        self.env_debug = bool(debug)
        self.errors = []

        self.top = None
        self.done = False
        self.state = self.TEXT

        # Reusable buffers, cleared on every scan step.
        self._content = []
        self._tag_name = []
        self._scanner = AttributeScanner(source, on_error=self._emit_error)

    @property
    def last_content(self):
        """Text read since the previous tag boundary."""
        return "".join(self._content)

    def debug(self, message):
        if self.env_debug:
            logger.debug(message)

    def __iter__(self):
        while not self.done:
            tag = self.descend()
            if tag is not None:
                yield tag

    # ---------------------
    # Scanning
    # ---------------------

    def descend(self):
        """Scan to the next tag boundary.

        Returns the newly opened Tag, or None when the step ended on a close
        tag or at the end of input. The text read on the way is available as
        ``last_content`` either way.
        """
        content = self._content
        content.clear()
        if self.done:
            return None

        source = self.source
        top = self.top
        raw_text = top is not None and top.name.lower() in self.opts.raw_text_tags
        self.state = self.TEXT
        while True:
            c = source.next()
            if c is None:
                return self._finish()
            if c != "<":
                content.append(c)
                continue

            c = source.peek()
            if raw_text:
                result = self._raw_text_boundary(top)
            elif c == "/":
                source.next()
                result = self._close_tag()
            elif c == DECLARATION_PREFIX:
                source.next()
                result = self._declaration()
            elif c is not None and c.isalpha():
                result = self._open_tag()
            else:
                content.append("<")
                result = _CONTINUE
            if result is not _CONTINUE:
                return result

    def ascend(self, close_name):
        """Close ``top`` and its ancestors up to the nearest one named ``close_name``.

        Every tag visited is marked closed, including the match. Returns True
        when a matching tag was found; otherwise the whole stack has been
        closed and ``top`` is None.
        """
        top = self.top
        if top is None:
            self._emit_error("unmatched-end-tag", f"</{close_name}> with no open tag")
            return False
        wanted = close_name.lower()
        while top is not None:
            top.closed = True
            self.top = top.parent
            if top.name.lower() == wanted:
                if self.env_debug:
                    self.debug(f"ascend: closed <{top.name}> at depth {top.depth}")
                return True
            if self.env_debug:
                self.debug(f"ascend: force-closed <{top.name}> while looking for </{close_name}>")
            self._emit_error("mismatched-end-tag", f"<{top.name}> closed by </{close_name}>")
            top = self.top
        return False

    def _open_tag(self):
        self.state = self.TAG_NAME
        name = self._read_tag_name()

        self.state = self.ATTRIBUTES
        scanner = self._scanner
        classes = None
        attributes = None
        self_closing = False
        while True:
            kind, attr_name, value = scanner.scan()
            if kind == AttributeScanner.ATTRIBUTE:
                if attr_name.lower() == "class":
                    classes = [c for c in value.split() if c]
                else:
                    if attributes is None:
                        attributes = {}
                    attributes[attr_name] = value
            elif kind == AttributeScanner.SELF_CLOSE:
                self_closing = True
            elif kind == AttributeScanner.END:
                break
            elif kind == AttributeScanner.EOF:
                return self._eof_in_tag(name)

        if name.lower() in self.opts.void_tags:
            self_closing = True
        return self._push(Tag(self.top, name, classes, attributes, self_closing))

    def _declaration(self):
        source = self.source
        if source.peek() == "-":
            source.next()
            if source.peek() == "-":
                source.next()
                return self._skip_comment()
            # <!-...> is a bogus comment
            if not self._skip_to_tag_end():
                return self._eof_in_tag("!-")
            return _CONTINUE

        self.state = self.TAG_NAME
        name = DECLARATION_PREFIX + self._read_tag_name()
        if not self._skip_to_tag_end():
            return self._eof_in_tag(name)
        return self._push(Tag(self.top, name, self_closing=True))

    def _close_tag(self):
        self.state = self.CLOSE_TAG
        source = self.source
        while True:
            c = source.peek()
            if c is None:
                return self._eof_in_tag("/")
            if c.isalpha():
                break
            source.next()
            if c == ">":
                # </> closes nothing
                self.state = self.TEXT
                return _CONTINUE

        name = self._read_tag_name()
        if not self._skip_to_tag_end():
            return self._eof_in_tag("/" + name)
        self.ascend(name)
        return None

    def _raw_text_boundary(self, top):
        """Handle a ``<`` inside a raw-text body; only ``</name>`` for ``top`` ends it."""
        source = self.source
        content = self._content
        if source.peek() != "/":
            content.append("<")
            return _CONTINUE
        source.next()
        name = self._read_tag_name() if source.peek() is not None and source.peek().isalpha() else ""
        after = source.peek()
        if name.lower() == top.name.lower() and (after is None or after in WHITESPACE or after in "/>"):
            self.state = self.CLOSE_TAG
            if not self._skip_to_tag_end():
                return self._eof_in_tag("/" + name)
            self.ascend(name)
            return None
        content.append("</")
        content.append(name)
        return _CONTINUE

    def _skip_comment(self):
        source = self.source
        dashes = 0
        while True:
            c = source.next()
            if c is None:
                self._emit_error("eof-in-comment")
                return self._finish()
            if c == ">" and dashes >= 2:
                return _CONTINUE
            dashes = dashes + 1 if c == "-" else 0

    def _push(self, tag):
        if not tag.self_closing:
            self.top = tag
        self.state = self.TEXT
        if self.env_debug:
            self.debug(f"descend: {tag!r}")
        return tag

    # ---------------------
    # Traversal helpers
    # ---------------------

    def find(self, predicate, *class_names):
        """Return the next tag accepted by ``predicate``, or None.

        ``predicate`` is either a callable taking a Tag or a tag name, in
        which case ``class_names`` lists classes the tag must carry. When
        called with a tag open, the search ends once that tag closes.
        """
        for tag in self.find_all(predicate, *class_names):
            return tag
        return None

    def find_all(self, predicate, *class_names):
        """Yield every matching tag until the input ends or the currently open tag closes."""
        predicate = _as_predicate(predicate, class_names)
        scope = self.top
        while not self.done:
            tag = self.descend()
            if tag is not None and predicate(tag):
                yield tag
            if scope is not None and scope.closed:
                return

    def close(self, tag):
        """Skip ahead until ``tag`` has been closed or the input ends."""
        while not tag.closed and not self.done:
            self.descend()

    def emphasized_content(self):
        """Read the text at the start of the next element and skip the rest of it.

        The returned text runs from the element's opening tag to the first
        tag boundary inside it, so nested markup cuts it short. If the step
        does not open an element, the text read by that step is returned.
        """
        tag = self.descend()
        if tag is None:
            return self.last_content
        self.descend()
        content = self.last_content
        if not tag.closed:
            self.close(tag)
        return content

    # ---------------------
    # Low-level helpers
    # ---------------------

    def _read_tag_name(self):
        source = self.source
        name = self._tag_name
        name.clear()
        while is_tag_name_char(source.peek()):
            name.append(source.next())
        return "".join(name)

    def _skip_to_tag_end(self):
        source = self.source
        while True:
            c = source.next()
            if c is None:
                return False
            if c == ">":
                return True

    def _finish(self):
        self.done = True
        self.state = self.DONE
        if self.env_debug:
            self.debug(f"end of input, {'no open tag' if self.top is None else f'<{self.top.name}> left open'}")
        return None

    def _eof_in_tag(self, partial):
        self._emit_error("eof-in-tag", f"input ended inside <{partial}")
        return self._finish()

    def _emit_error(self, code, message=None):
        if not (self.collect_errors or self.strict):
            return
        error = ParseError(code, self.source.line, self.source.column, message)
        if self.strict:
            raise StrictModeError(error)
        self.errors.append(error)


def _as_predicate(predicate, class_names):
    if isinstance(predicate, str):
        tag_name = predicate
        return lambda tag: tag.matches(tag_name, *class_names)
    if class_names:
        raise TypeError("class names are only accepted together with a tag name")
    return predicate
