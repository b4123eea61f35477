"""Lexical analysis for acalc expressions. Converts source text into a lazy stream of tokens.

Tokens can be loosely defined as follows:

```
<integer>    ::= <digit>+           ; non-negative, no sign or decimal point
<identifier> ::= <letter>+          ; case-sensitive, any length, no digits or underscores
<symbol>     ::= "+" | "-" | "*" | "/" | "=" | "(" | ")"
```

Whitespace between tokens is ignored. A digit run is never joined to a letter run: "2x" is two tokens.
"""

import string
from dataclasses import dataclass, field
from enum import Enum

from acalc.lang.error import LexicalError


class TokenKind(Enum):
    INTEGER = "INTEGER"
    IDENTIFIER = "IDENTIFIER"
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"
    ASSIGN = "ASSIGN"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    EOF = "EOF"


SYMBOLS = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "=": TokenKind.ASSIGN,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)


@dataclass(frozen=True)
class Token:
    """Immutable token. [pos, end) is the token's span in the source, kept for error messages only."""
    kind: TokenKind
    value: object = None
    pos: int = field(default=0, compare=False)
    end: int = field(default=0, compare=False)

    def __str__(self):
        return f"Token({self.kind.value}, {self.value!r})"


class Lexer:
    """On-demand tokenizer: each call to next_token scans exactly one token from the current position."""

    def __init__(self, text):
        self.text = text
        self.pos = 0

    def _scan_run(self, chars):
        """Consumes the maximal run of characters in chars starting at self.pos and returns it."""
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in chars:
            self.pos += 1
        return self.text[start:self.pos]

    def _skip_whitespace(self):
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def next_token(self):
        """Returns the next Token and advances past it. Once the text is exhausted, keeps returning EOF."""
        self._skip_whitespace()

        start = self.pos
        if start >= len(self.text):
            return Token(TokenKind.EOF, None, start, start)

        char = self.text[start]
        if char in DIGITS:
            digits = self._scan_run(DIGITS)
            try:
                value = int(digits)
            except ValueError:  # longer than sys.get_int_max_str_digits()
                raise LexicalError("integer literal too long", self.text, start=start, end=self.pos) from None
            return Token(TokenKind.INTEGER, value, start, self.pos)

        if char in LETTERS:
            return Token(TokenKind.IDENTIFIER, self._scan_run(LETTERS), start, self.pos)

        if char in SYMBOLS:
            self.pos += 1
            return Token(SYMBOLS[char], char, start, self.pos)

        raise LexicalError(f"invalid character '{char}'", self.text, start=start, end=start + 1)

    def __iter__(self):
        """Lazily yields tokens up to and including the first EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return
