"""Tokenizer for script source text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator

from goblin.scope import ScriptError


class Tok(Enum):
    """Kinds of tokens produced by the scanner.

    Single-character tokens have that character as their value.
    """

    EOF = "EOF"
    IDENT = "IDENT"
    NUMBER = "NUMBER"
    STRING = "STRING"
    VARARG = "VARARG"
    ARRAYLIT = "ARRAYLIT"

    FUNC = "FUNC"
    RETURN = "RETURN"
    VAR = "VAR"
    THROW = "THROW"
    IF = "IF"
    ELSE = "ELSE"
    FOR = "FOR"
    IN = "IN"
    NEW = "NEW"
    TRUE = "TRUE"
    FALSE = "FALSE"
    NIL = "NIL"
    MODULE = "MODULE"
    TRY = "TRY"
    CATCH = "CATCH"
    FINALLY = "FINALLY"
    BREAK = "BREAK"
    CONTINUE = "CONTINUE"
    SWITCH = "SWITCH"
    CASE = "CASE"
    DEFAULT = "DEFAULT"
    MAKE = "MAKE"

    EQEQ = "EQEQ"
    NEQ = "NEQ"
    GE = "GE"
    LE = "LE"
    OROR = "OROR"
    ANDAND = "ANDAND"
    PLUSEQ = "PLUSEQ"
    MINUSEQ = "MINUSEQ"
    MULEQ = "MULEQ"
    DIVEQ = "DIVEQ"
    ANDEQ = "ANDEQ"
    OREQ = "OREQ"
    PLUSPLUS = "PLUSPLUS"
    MINUSMINUS = "MINUSMINUS"
    POW = "POW"
    SHIFTLEFT = "SHIFTLEFT"
    SHIFTRIGHT = "SHIFTRIGHT"

    NOT = "!"
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    GT = ">"
    LT = "<"
    PIPE = "|"
    AMP = "&"
    DOT = "."
    NEWLINE = "\n"
    LPAREN = "("
    RPAREN = ")"
    COLON = ":"
    SEMICOLON = ";"
    PERCENT = "%"
    QUESTION = "?"
    LBRACE = "{"
    RBRACE = "}"
    COMMA = ","
    LBRACKET = "["
    RBRACKET = "]"
    CARET = "^"


KEYWORDS: dict[str, Tok] = {
    "func": Tok.FUNC,
    "return": Tok.RETURN,
    "var": Tok.VAR,
    "throw": Tok.THROW,
    "if": Tok.IF,
    "for": Tok.FOR,
    "break": Tok.BREAK,
    "continue": Tok.CONTINUE,
    "in": Tok.IN,
    "else": Tok.ELSE,
    "new": Tok.NEW,
    "true": Tok.TRUE,
    "false": Tok.FALSE,
    "nil": Tok.NIL,
    "module": Tok.MODULE,
    "try": Tok.TRY,
    "catch": Tok.CATCH,
    "finally": Tok.FINALLY,
    "switch": Tok.SWITCH,
    "case": Tok.CASE,
    "default": Tok.DEFAULT,
    "make": Tok.MAKE,
}

_PAIRS: dict[str, dict[str, Tok]] = {
    "!": {"=": Tok.NEQ},
    "=": {"=": Tok.EQEQ},
    "+": {"+": Tok.PLUSPLUS, "=": Tok.PLUSEQ},
    "-": {"-": Tok.MINUSMINUS, "=": Tok.MINUSEQ},
    "*": {"*": Tok.POW, "=": Tok.MULEQ},
    "/": {"=": Tok.DIVEQ},
    ">": {"=": Tok.GE, ">": Tok.SHIFTRIGHT},
    "<": {"=": Tok.LE, "<": Tok.SHIFTLEFT},
    "|": {"|": Tok.OROR, "=": Tok.OREQ},
    "&": {"&": Tok.ANDAND, "=": Tok.ANDEQ},
}

_SINGLES = frozenset("():;%?{},]^\n")

_ESCAPES = {"b": "\b", "f": "\f", "r": "\r", "n": "\n", "t": "\t"}


@dataclass(frozen=True)
class Position:
    """A one-based line and column in the source."""

    line: int
    column: int


@dataclass(frozen=True)
class Token:
    """A scanned token: its kind, literal text and starting position."""

    tok: Tok
    lit: str
    pos: Position


class ScanError(ScriptError):
    """Raised when the source cannot be split into tokens."""

    def __init__(self, message: str, position: Position | None = None):
        super().__init__(message, position, fatal=True)


def _is_letter(ch: str | None) -> bool:
    return ch is not None and (ch.isalpha() or ch == "_")


def _is_digit(ch: str | None) -> bool:
    return ch is not None and "0" <= ch <= "9"


def _is_hex(ch: str | None) -> bool:
    return ch is not None and ch in "0123456789abcdefABCDEF"


def _is_digit_or_dot(ch: str | None) -> bool:
    return _is_digit(ch) or ch == "."


def _is_eol(ch: str | None) -> bool:
    return ch is None or ch == "\n"


def _is_blank(ch: str | None) -> bool:
    return ch is not None and ch in " \t\r"


class Scanner:
    """Splits source text into tokens, one call to scan() at a time."""

    def __init__(self, src: str):
        self._src = src
        self._offset = 0
        self._line_head = 0
        self._line = 0

    def _peek(self) -> str | None:
        if self._offset < len(self._src):
            return self._src[self._offset]
        return None

    def _next(self) -> None:
        if self._offset < len(self._src):
            if self._src[self._offset] == "\n":
                self._line_head = self._offset + 1
                self._line += 1
            self._offset += 1

    def _back(self) -> None:
        self._offset -= 1

    def _pos(self) -> Position:
        return Position(self._line + 1, self._offset - self._line_head + 1)

    def _skip_while(self, predicate: Callable[[str | None], bool]) -> None:
        while predicate(self._peek()):
            self._next()

    def _skip_to_eol(self) -> None:
        while not _is_eol(self._peek()):
            self._next()

    def scan(self) -> Token:
        """Return the next token; at the end of input, an EOF token every time."""
        while True:
            self._skip_while(_is_blank)
            pos = self._pos()
            ch = self._peek()
            if _is_letter(ch):
                lit = self._scan_identifier()
                return Token(KEYWORDS.get(lit, Tok.IDENT), lit, pos)
            if _is_digit(ch):
                return Token(Tok.NUMBER, self._scan_number(pos), pos)
            if ch == '"' or ch == "'":
                return Token(Tok.STRING, self._scan_string(ch, pos), pos)
            if ch == "`":
                return Token(Tok.STRING, self._scan_raw_string(pos), pos)
            if ch is None:
                return Token(Tok.EOF, "", pos)
            if ch == "#":
                self._skip_to_eol()
                continue
            if ch == "/" and self._skip_comment():
                continue
            tok, lit = self._scan_operator(ch, pos)
            self._next()
            return Token(tok, lit, pos)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to, but not including, the end of input."""
        while True:
            token = self.scan()
            if token.tok is Tok.EOF:
                return
            yield token

    def _skip_comment(self) -> bool:
        self._next()
        follow = self._peek()
        if follow == "/":
            self._next()
            self._skip_to_eol()
            return True
        if follow == "*":
            self._next()
            while True:
                ch = self._peek()
                if ch is None:
                    return True
                self._next()
                if ch == "*" and self._peek() == "/":
                    self._next()
                    return True
        self._back()
        return False

    def _scan_operator(self, ch: str, pos: Position) -> tuple[Tok, str]:
        if ch in _PAIRS:
            self._next()
            follow = self._peek()
            tok = _PAIRS[ch].get(follow) if follow is not None else None
            if tok is not None:
                return tok, ch + follow
            self._back()
            return Tok(ch), ch
        if ch == ".":
            self._next()
            if self._peek() == ".":
                self._next()
                if self._peek() == ".":
                    return Tok.VARARG, "..."
                raise ScanError('syntax error ".."', pos)
            self._back()
            return Tok.DOT, ch
        if ch == "[":
            self._next()
            if self._peek() == "]":
                self._next()
                if _is_letter(self._peek()):
                    self._back()
                    return Tok.ARRAYLIT, "[]"
                self._back()
            self._back()
            return Tok.LBRACKET, ch
        if ch in _SINGLES:
            return Tok(ch), ch
        raise ScanError(f'syntax error "{ch}"', pos)

    def _scan_identifier(self) -> str:
        start = self._offset
        self._skip_while(lambda c: _is_letter(c) or _is_digit(c))
        return self._src[start : self._offset]

    def _scan_number(self, pos: Position) -> str:
        start = self._offset
        ch = self._peek()
        self._next()
        if ch == "0" and self._peek() == "x":
            self._next()
            self._skip_while(_is_hex)
        else:
            self._skip_while(_is_digit_or_dot)
            if self._peek() == "e":
                self._next()
                follow = self._peek()
                if _is_digit(follow) or follow in ("+", "-"):
                    self._next()
                    self._skip_while(_is_digit_or_dot)
                self._skip_while(_is_digit_or_dot)
            if _is_letter(self._peek()):
                raise ScanError(
                    "identifier starts immediately after numeric literal", pos
                )
        return self._src[start : self._offset]

    def _scan_raw_string(self, pos: Position) -> str:
        chars = []
        while True:
            self._next()
            ch = self._peek()
            if ch is None:
                raise ScanError("unexpected EOF", pos)
            if ch == "`":
                self._next()
                return "".join(chars)
            chars.append(ch)

    def _scan_string(self, quote: str, pos: Position) -> str:
        chars = []
        while True:
            self._next()
            ch = self._peek()
            if ch == "\n":
                raise ScanError("unexpected EOL", pos)
            if ch is None:
                raise ScanError("unexpected EOF", pos)
            if ch == quote:
                self._next()
                return "".join(chars)
            if ch == "\\":
                self._next()
                escaped = self._peek()
                if escaped is not None:
                    chars.append(_ESCAPES.get(escaped, escaped))
                continue
            chars.append(ch)


def tokenize(src: str) -> list[Token]:
    """Return every token of the source, without the final EOF token."""
    return list(Scanner(src))