"""Pull-based character source for the navigator.

Wraps a string, a file-like object or an iterable of string chunks and hands
out one character at a time, with a single character of look-ahead.
"""

from collections import deque


class CharSource:
    __slots__ = ("_buffers", "_chunks", "_exhausted", "_reader", "chunk_size", "column", "line")

    def __init__(self, source, chunk_size=8192):
        self._buffers = deque()
        self._reader = None
        self._chunks = None
        self._exhausted = False
        self.chunk_size = chunk_size
        self.line = 1
        self.column = 0

        if isinstance(source, str):
            self.push_back(source)
            self._exhausted = True
        elif hasattr(source, "read"):
            self._reader = source
        else:
            self._chunks = iter(source)

    def __repr__(self):
        return f"CharSource(line={self.line}, column={self.column})"

    def push_back(self, chunk):
        if chunk:
            self._buffers.append([chunk, 0])

    def next(self):
        """Consume and return the next character, or None at end of input."""
        c = self._take()
        if c is None:
            return None
        if c == "\r":
            # \r\n and lone \r both become \n
            if self._look() == "\n":
                self._take()
            c = "\n"
        if c == "\n":
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return c

    def peek(self):
        """Return the next character without consuming it, or None at end of input."""
        c = self._look()
        if c == "\r":
            return "\n"
        return c

    def _look(self):
        if not self._fill():
            return None
        chunk, index = self._buffers[0]
        return chunk[index]

    def _take(self):
        if not self._fill():
            return None
        chunk, index = self._buffers[0]
        char = chunk[index]
        index += 1
        if index >= len(chunk):
            self._buffers.popleft()
        else:
            self._buffers[0][1] = index
        return char

    def _fill(self):
        while not self._buffers:
            if self._exhausted:
                return False
            if self._reader is not None:
                chunk = self._reader.read(self.chunk_size)
                if not chunk:
                    self._exhausted = True
                    return False
            else:
                try:
                    chunk = next(self._chunks)
                except StopIteration:
                    self._exhausted = True
                    return False
            self.push_back(chunk)
        return True
