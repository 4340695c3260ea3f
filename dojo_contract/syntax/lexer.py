"""
dojo_contract.syntax.lexer — tokenizer for contract module source.

Only the lexical structure the item parser needs is recognised: identifiers,
numbers, quoted literals, punctuation and `//` line comments. Comments are not
emitted as tokens; instead every token remembers where its leading comment
block started (`lead`) so that items sliced out of the source keep their doc
comments.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from ..errors import ParseError


class TokenType(Enum):
    IDENT = auto()
    NUMBER = auto()
    STRING = auto()
    PUNCT = auto()
    EOF = auto()


# Compound punctuation that must not be split.
COMPOUND_PUNCT = ("::", "->", "=>")

OPEN_BRACKETS = {"(": ")", "[": "]", "{": "}"}
CLOSE_BRACKETS = {v: k for k, v in OPEN_BRACKETS.items()}


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    start: int
    end: int
    lead: int
    line: int
    column: int

    def is_punct(self, value: str) -> bool:
        return self.type is TokenType.PUNCT and self.value == value

    def is_ident(self, value: Optional[str] = None) -> bool:
        if self.type is not TokenType.IDENT:
            return False
        return value is None or self.value == value


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self._comment_start: Optional[int] = None

    def peek(self, offset: int = 0) -> str:
        pos = self.pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def advance(self) -> str:
        ch = self.peek()
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def skip_whitespace(self) -> None:
        while self.peek() and self.peek().isspace():
            self.advance()

    def skip_comment(self) -> None:
        if self._comment_start is None:
            self._comment_start = self.pos
        while self.peek() and self.peek() != "\n":
            self.advance()

    def read_quoted(self) -> None:
        line, column = self.line, self.column
        quote = self.advance()
        while self.peek() and self.peek() != quote:
            if self.peek() == "\\":
                self.advance()
            self.advance()
        if not self.peek():
            raise ParseError("Unterminated literal", line=line, column=column)
        self.advance()

    def read_word(self) -> None:
        while self.peek() and (self.peek().isalnum() or self.peek() == "_"):
            self.advance()

    def add_token(self, token_type: TokenType, start: int, line: int, column: int) -> None:
        lead = self._comment_start if self._comment_start is not None else start
        self._comment_start = None
        self.tokens.append(
            Token(token_type, self.source[start : self.pos], start, self.pos, lead, line, column)
        )

    def tokenize(self) -> List[Token]:
        while True:
            self.skip_whitespace()
            if self.pos >= len(self.source):
                break

            if self.peek() == "/" and self.peek(1) == "/":
                self.skip_comment()
                continue

            start, line, column = self.pos, self.line, self.column
            ch = self.peek()

            if ch in "\"'":
                self.read_quoted()
                self.add_token(TokenType.STRING, start, line, column)
                continue

            if ch.isdigit():
                self.read_word()
                self.add_token(TokenType.NUMBER, start, line, column)
                continue

            if ch.isalpha() or ch == "_":
                self.read_word()
                self.add_token(TokenType.IDENT, start, line, column)
                continue

            two_char = ch + self.peek(1)
            if two_char in COMPOUND_PUNCT:
                self.advance()
                self.advance()
                self.add_token(TokenType.PUNCT, start, line, column)
                continue

            self.advance()
            self.add_token(TokenType.PUNCT, start, line, column)

        end = len(self.source)
        self.tokens.append(Token(TokenType.EOF, "", end, end, end, self.line, self.column))
        return self.tokens


def tokenize(source: str) -> List[Token]:
    """Split `source` into tokens, terminated by a single EOF token."""
    return Lexer(source).tokenize()


__all__ = ["TokenType", "Token", "Lexer", "tokenize", "OPEN_BRACKETS", "CLOSE_BRACKETS"]
