"""Text helpers: line prefixing and script string quoting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO


@dataclass
class Prefixer:
    """A writer that inserts ``prefix`` after every newline it passes on."""

    writer: TextIO
    prefix: str = ""

    def write(self, text: str) -> int:
        """Write text, returning the number of characters sent to the writer."""
        if not self.prefix:
            self.writer.write(text)
            return len(text)
        written = 0
        *lines, rest = text.split("\n")
        for line in lines:
            self.writer.write(line + "\n")
            self.writer.write(self.prefix)
            written += len(line) + 1 + len(self.prefix)
        if rest:
            self.writer.write(rest)
            written += len(rest)
        return written


_ESCAPES = {'"': '\\"', "\n": "\\n", "\t": "\\t"}


def quoted_string(text: str) -> str:
    """Quote text so that it can appear as a string literal in a script."""
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in text) + '"'