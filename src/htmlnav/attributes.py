"""Attribute scanning inside an opening tag.

The scanner runs after the tag name has been read and stops at the closing
``>``. Each ``scan()`` call consumes at most one attribute and reports what it
found. Anything it cannot make sense of is dropped and scanning resumes at the
next plausible attribute name, so a malformed attribute never takes the rest
of the tag down with it.
"""

from .constants import ATTR_NAME_PUNCTUATION, WHITESPACE

_QUOTES = ('"', "'")


def is_attr_name_char(c):
    return c is not None and (c.isalnum() or c in ATTR_NAME_PUNCTUATION)


class AttributeScanner:
    ATTRIBUTE = 0
    DROPPED = 1
    SELF_CLOSE = 2
    END = 3
    EOF = 4

    __slots__ = ("_name", "_value", "on_error", "source")

    def __init__(self, source, on_error=None):
        self.source = source
        self.on_error = on_error
        # Reusable buffers to avoid per-attribute allocations.
        self._name = []
        self._value = []

    def scan(self):
        """Return ``(kind, name, value)``; name and value are None unless kind is ATTRIBUTE."""
        source = self.source
        while True:
            c = source.peek()
            if c is None:
                return self.EOF, None, None
            if c == ">":
                source.next()
                return self.END, None, None
            if c == "/":
                source.next()
                if source.peek() == ">":
                    return self.SELF_CLOSE, None, None
                continue
            if is_attr_name_char(c):
                break
            source.next()
            if c not in WHITESPACE:
                self._drop(f"unexpected character {c!r}")
                return self.DROPPED, None, None

        name = self._name
        name.clear()
        while is_attr_name_char(source.peek()):
            name.append(source.next())
        attr_name = "".join(name)

        self._skip_whitespace()
        c = source.peek()
        if c is None:
            return self.EOF, None, None
        if c != "=":
            self._drop(f"attribute {attr_name!r} has no value")
            return self.DROPPED, None, None
        source.next()
        self._skip_whitespace()

        quote = source.peek()
        if quote is None:
            return self.EOF, None, None
        if quote not in _QUOTES:
            # Unquoted value: skip it so the next scan starts on a fresh name
            while True:
                c = source.peek()
                if c is None:
                    return self.EOF, None, None
                if c == ">" or c in WHITESPACE:
                    break
                source.next()
            self._drop(f"attribute {attr_name!r} value is not quoted")
            return self.DROPPED, None, None
        source.next()

        value = self._value
        value.clear()
        while True:
            c = source.next()
            if c is None:
                return self.EOF, None, None
            if c == quote:
                break
            value.append(c)
        return self.ATTRIBUTE, attr_name, "".join(value)

    def _skip_whitespace(self):
        source = self.source
        while True:
            c = source.peek()
            if c is None or c not in WHITESPACE:
                return
            source.next()

    def _drop(self, message):
        if self.on_error is not None:
            self.on_error("dropped-attribute", message)
