"""Lexical analysis for the calculator. A TokenStream turns one line of input into tokens on demand, with a single
token of putback, which is all the lookahead the recursive-descent evaluator needs.

Tokens can be loosely defined as follows:

```
<operator>   ::= "+" | "-" | "*" | "/" | "%" | "(" | ")" | "="
<number>     ::= <digit>+ ["." <digit>*] [<exponent>]
               | "." <digit>+ [<exponent>]
<exponent>   ::= ("e" | "E") ["+" | "-"] <digit>+      ; only part of the number if digits follow
<name>       ::= <letter> (<letter> | <digit>)*        ; ASCII only, "let" is reserved
```

Whitespace between tokens is skipped.
"""

import enum
import re
from dataclasses import dataclass

from calculator.lang.error import InternalError, LexError


class TokenKind(enum.Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    LPAREN = "("
    RPAREN = ")"
    EQUALS = "="
    NUMBER = "<number>"
    NAME = "<name>"
    LET = "let"
    EOF = "<end of input>"
    INVALID = "<invalid>"


@dataclass(frozen=True)
class Token:
    """One lexical unit. start and end are the columns of the unit in its line (used for error display)."""
    kind: TokenKind
    value: float = 0.0
    name: str = ""
    start: int = 0
    end: int = 0

    def __str__(self):
        if self.kind is TokenKind.NUMBER:
            return f"{self.value:g}"
        elif self.kind is TokenKind.NAME:
            return self.name
        return self.kind.value


class TokenStream:
    """Token scanner over a single line of input, supporting one token of putback."""
    OPERATORS = {kind.value: kind for kind in TokenKind if len(kind.value) == 1}
    KEYWORDS = {"let": TokenKind.LET}

    NUMBER = re.compile(r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
    NAME = re.compile(r"[A-Za-z][A-Za-z0-9]*")

    def __init__(self, line):
        self.line = line
        self.pos = 0
        self._buffer = None  # holds a token only between putback and the next get

    @property
    def buffer_full(self):
        return self._buffer is not None

    def get(self):
        """Returns the buffered token if there is one, otherwise reads the next token from the line. Raises LexError
        on an unrecognized character.
        """
        if self._buffer is not None:
            token, self._buffer = self._buffer, None
            return token

        token = self._read()
        if token.kind is TokenKind.INVALID:
            raise LexError("unexpected token '{1}' in '{0}'", (self.line, token.name), start=token.start,
                           end=token.end)
        return token

    def putback(self, token):
        """Returns token to the buffer so that it is read by the next call to get."""
        if self._buffer is not None:
            msg = "called putback with '{1}' while '{2}' is already buffered"
            raise InternalError(msg, (self.line, str(token), str(self._buffer)))
        self._buffer = token

    def ignore(self, kind):
        """Reads and discards tokens until a token of the given kind is read or end of input is reached. Unrecognized
        characters are skipped rather than raised.
        """
        if self._buffer is not None:
            token, self._buffer = self._buffer, None
            if token.kind is kind or token.kind is TokenKind.EOF:
                return

        token = self._read()
        while token.kind is not kind and token.kind is not TokenKind.EOF:
            token = self._read()

    def _read(self):
        """Scans the next token from the line, returning an INVALID token for an unrecognized character."""
        while self.pos < len(self.line) and self.line[self.pos].isspace():
            self.pos += 1

        start = self.pos
        if start >= len(self.line):
            return Token(TokenKind.EOF, start=start, end=start)

        char = self.line[start]
        if char in TokenStream.OPERATORS:
            self.pos += 1
            return Token(TokenStream.OPERATORS[char], start=start, end=self.pos)

        if char in "0123456789.":
            match = TokenStream.NUMBER.match(self.line, start)
            if match:
                self.pos = match.end()
                return Token(TokenKind.NUMBER, value=float(match.group()), start=start, end=self.pos)

        else:
            match = TokenStream.NAME.match(self.line, start)
            if match:
                self.pos = match.end()
                name = match.group()
                if name in TokenStream.KEYWORDS:
                    return Token(TokenStream.KEYWORDS[name], start=start, end=self.pos)
                return Token(TokenKind.NAME, name=name, start=start, end=self.pos)

        self.pos += 1
        return Token(TokenKind.INVALID, name=char, start=start, end=self.pos)
