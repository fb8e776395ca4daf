from types import MappingProxyType

_EMPTY_ATTRIBUTES = MappingProxyType({})


class Tag:
    """One opened element as seen by the navigator.

    Everything but ``closed`` is fixed at creation. ``parent`` is the tag that
    was open when this one was scanned; it is a lookup link only, the
    navigator owns the live nesting path.
    """

    __slots__ = ("attributes", "classes", "closed", "depth", "name", "parent", "self_closing")

    def __init__(self, parent, name, classes=None, attributes=None, self_closing=False):
        self.parent = parent
        self.name = name
        self.classes = frozenset(classes) if classes else frozenset()
        self.attributes = MappingProxyType(dict(attributes)) if attributes else _EMPTY_ATTRIBUTES
        self.depth = 1 if parent is None else parent.depth + 1
        self.self_closing = bool(self_closing)
        self.closed = self.self_closing

    def matches(self, tag_name, *class_names):
        if self.name.lower() != tag_name.lower():
            return False
        for class_name in class_names:
            if class_name not in self.classes:
                return False
        return True

    def __repr__(self):
        if self.attributes:
            attrs = " " + " ".join(f"{name}={value!r}" for name, value in self.attributes.items())
        else:
            attrs = ""
        classes = f" .{'.'.join(sorted(self.classes))}" if self.classes else ""
        status = "closed" if self.closed else "open"
        return f"<tag:{self.name}{classes}{attrs} depth={self.depth} {status}>"

    def __str__(self):
        parts = ["<", self.name]
        if self.classes:
            parts.append(f' class="{" ".join(sorted(self.classes))}"')
        for name, value in self.attributes.items():
            parts.append(f' {name}="{value}"')
        if self.self_closing and not self.name.startswith("!"):
            parts.append(" /")
        parts.append(">")
        return "".join(parts)


class ParseError:
    """Represents an absorbed markup problem with location information."""

    __slots__ = ("code", "column", "line", "message")

    def __init__(self, code, line=None, column=None, message=None):
        self.code = code
        self.line = line
        self.column = column
        self.message = message or code

    def __repr__(self):
        if self.line is not None and self.column is not None:
            return f"ParseError({self.code!r}, line={self.line}, column={self.column})"
        return f"ParseError({self.code!r})"

    def __str__(self):
        if self.line is not None and self.column is not None:
            if self.message != self.code:
                return f"({self.line},{self.column}): {self.code} - {self.message}"
            return f"({self.line},{self.column}): {self.code}"
        if self.message != self.code:
            return f"{self.code} - {self.message}"
        return self.code

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.code == other.code and self.line == other.line and self.column == other.column

    __hash__ = None  # Unhashable since we define __eq__


class StrictModeError(Exception):
    """Raised in strict mode on the first markup problem the navigator would otherwise absorb."""

    def __init__(self, error):
        self.error = error
        super().__init__(str(error))
