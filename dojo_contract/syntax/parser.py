"""
dojo_contract.syntax.parser — item-level parser for contract modules.

Recognised items:
  * `mod name { items }` / `mod name;`
  * `enum Name<..> { variants }`
  * `struct Name<..> { members }`
  * `fn name<..>(params) -> Ret { statements }`

Every other item (use, impl, trait, const, type aliases, inline macros, ...)
becomes an OtherNode whose extent is found by bracket matching. Leading
attributes and a `pub` / `pub(crate)` visibility belong to the item that
follows them.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..config import load_config
from ..errors import DojoContractError, ParseError
from .lexer import CLOSE_BRACKETS, OPEN_BRACKETS, Token, TokenType, tokenize
from .nodes import EnumNode, FreeFunctionNode, ModuleNode, OtherNode, StructNode, SyntaxNode

log = logging.getLogger(__name__)

# Items of these kinds always run up to a terminating `;`, even when they
# contain braces (`use a::{b, c};`).
SEMICOLON_ITEMS = frozenset({"use", "const", "type", "extern", "let"})

# Statements starting with one of these end with their block, no `;` needed.
BLOCK_STATEMENTS = frozenset({"if", "loop", "match", "while", "for"})

# Tokens that continue an expression after a block closes (`} else {`, `}.unwrap()`).
BLOCK_CONTINUATIONS = frozenset({"else", ".", "?", ";"})


class Parser:
    def __init__(self, source: str, tokens: List[Token]):
        self.source = source
        self.tokens = tokens
        self.pos = 0

    # --- token cursor ---------------------------------------------------------

    def peek(self, offset: int = 0) -> Token:
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[pos]

    def current(self) -> Token:
        return self.peek()

    def advance(self) -> Token:
        token = self.current()
        if token.type is not TokenType.EOF:
            self.pos += 1
        return token

    def at_eof(self) -> bool:
        return self.current().type is TokenType.EOF

    def error(self, message: str, token: Optional[Token] = None) -> ParseError:
        tok = token or self.current()
        return ParseError(message, line=tok.line, column=tok.column)

    def expect_punct(self, value: str) -> Token:
        tok = self.current()
        if not tok.is_punct(value):
            raise self.error(f"Expected '{value}' but found {tok.value or 'end of input'!r}")
        return self.advance()

    def expect_ident(self) -> Token:
        tok = self.current()
        if tok.type is not TokenType.IDENT:
            raise self.error(f"Expected an identifier but found {tok.value or 'end of input'!r}")
        return self.advance()

    def slice(self, first: Token, last: Token) -> str:
        return self.source[first.lead : last.end]

    # --- bracket helpers ------------------------------------------------------

    def skip_balanced(self) -> Token:
        """Consume a bracketed group starting at the current token; return its closer."""
        opener = self.advance()
        stack = [OPEN_BRACKETS[opener.value]]
        while stack:
            tok = self.advance()
            if tok.type is TokenType.EOF:
                raise self.error(f"Unclosed '{opener.value}'", opener)
            if tok.type is not TokenType.PUNCT:
                continue
            if tok.value in OPEN_BRACKETS:
                stack.append(OPEN_BRACKETS[tok.value])
            elif tok.value in CLOSE_BRACKETS:
                if tok.value != stack.pop():
                    raise self.error(f"Mismatched '{tok.value}'", tok)
        return tok

    def skip_generics(self) -> None:
        if not self.current().is_punct("<"):
            return
        depth = 0
        while True:
            tok = self.advance()
            if tok.type is TokenType.EOF:
                raise self.error("Unclosed generic parameter list", tok)
            if tok.is_punct("<"):
                depth += 1
            elif tok.is_punct(">"):
                depth -= 1
                if depth == 0:
                    return

    def split_list(self, closer: str) -> Tuple[Tuple[str, ...], Token]:
        """
        Split a comma-separated list up to `closer` (the opener is already
        consumed). Angle brackets count as nesting so `Map<K, V>` stays whole.
        """
        fragments: List[str] = []
        first: Optional[Token] = None
        last: Optional[Token] = None
        stack: List[str] = []
        while True:
            tok = self.current()
            if tok.type is TokenType.EOF:
                raise self.error(f"Expected '{closer}' before end of input", tok)
            if not stack and tok.is_punct(closer):
                break
            self.advance()
            if not stack and tok.is_punct(","):
                if first is not None and last is not None:
                    fragments.append(self.slice(first, last))
                first = last = None
                continue
            if tok.type is TokenType.PUNCT:
                if tok.value in OPEN_BRACKETS:
                    stack.append(OPEN_BRACKETS[tok.value])
                elif tok.value == "<":
                    stack.append(">")
                elif tok.value in CLOSE_BRACKETS or tok.value == ">":
                    if not stack or stack.pop() != tok.value:
                        raise self.error(f"Mismatched '{tok.value}'", tok)
            if first is None:
                first = tok
            last = tok
        if first is not None and last is not None:
            fragments.append(self.slice(first, last))
        return tuple(fragments), self.advance()

    # --- items ----------------------------------------------------------------

    def parse_items(self, *, closer: Optional[str] = None) -> List[SyntaxNode]:
        items: List[SyntaxNode] = []
        while True:
            tok = self.current()
            if closer is not None and tok.is_punct(closer):
                return items
            if tok.type is TokenType.EOF:
                if closer is not None:
                    raise self.error(f"Expected '{closer}' before end of input", tok)
                return items
            items.append(self.parse_item())

    def parse_item(self) -> SyntaxNode:
        start = self.current()

        while self.current().is_punct("#"):
            self.advance()
            if self.current().is_punct("!"):
                self.advance()
            if not self.current().is_punct("["):
                raise self.error("Expected '[' after '#'")
            self.skip_balanced()

        if self.current().is_ident("pub"):
            self.advance()
            if self.current().is_punct("("):
                self.skip_balanced()

        keyword = self.current()
        if keyword.is_ident("mod"):
            return self.parse_module(start)
        if keyword.is_ident("enum"):
            return self.parse_enum(start)
        if keyword.is_ident("struct"):
            return self.parse_struct(start)
        if keyword.is_ident("fn"):
            return self.parse_function(start)
        return self.parse_other(start)

    def parse_module(self, start: Token) -> ModuleNode:
        self.advance()
        name = self.expect_ident()
        if self.current().is_punct(";"):
            end = self.advance()
            return ModuleNode(text=self.slice(start, end), line=start.line, name=name.value)

        self.expect_punct("{")
        items = self.parse_items(closer="}")
        end = self.expect_punct("}")
        return ModuleNode(
            text=self.slice(start, end),
            line=start.line,
            name=name.value,
            items=tuple(items),
        )

    def parse_enum(self, start: Token) -> EnumNode:
        self.advance()
        name = self.expect_ident()
        self.skip_generics()
        self.expect_punct("{")
        variants, end = self.split_list("}")
        return EnumNode(
            text=self.slice(start, end), line=start.line, name=name.value, variants=variants
        )

    def parse_struct(self, start: Token) -> StructNode:
        self.advance()
        name = self.expect_ident()
        self.skip_generics()
        self.expect_punct("{")
        members, end = self.split_list("}")
        return StructNode(
            text=self.slice(start, end), line=start.line, name=name.value, members=members
        )

    def parse_function(self, start: Token) -> SyntaxNode:
        self.advance()
        name = self.expect_ident()
        self.skip_generics()
        self.expect_punct("(")
        params, _ = self.split_list(")")

        # Return type, `nopanic`, implicits: skip until the body or a `;`.
        while not (self.current().is_punct("{") or self.current().is_punct(";")):
            tok = self.current()
            if tok.type is TokenType.EOF:
                raise self.error("Expected function body before end of input", tok)
            if tok.type is TokenType.PUNCT and tok.value in OPEN_BRACKETS:
                self.skip_balanced()
            else:
                self.advance()

        if self.current().is_punct(";"):
            end = self.advance()
            return OtherNode(text=self.slice(start, end), line=start.line, keyword="fn")

        self.advance()
        statements = self.parse_statements()
        end = self.expect_punct("}")
        return FreeFunctionNode(
            text=self.slice(start, end),
            line=start.line,
            name=name.value,
            params=params,
            statements=statements,
        )

    def parse_statements(self) -> Tuple[str, ...]:
        statements: List[str] = []
        while not self.current().is_punct("}"):
            if self.at_eof():
                raise self.error("Expected '}' before end of input")
            statements.append(self.parse_statement())
        return tuple(statements)

    def parse_statement(self) -> str:
        first = self.current()
        while self.current().is_punct("#"):
            self.advance()
            if not self.current().is_punct("["):
                raise self.error("Expected '[' after '#'")
            self.skip_balanced()

        head = self.current()
        is_block = head.is_punct("{") or (
            head.type is TokenType.IDENT and head.value in BLOCK_STATEMENTS
        )
        last: Optional[Token] = None
        while True:
            tok = self.current()
            if tok.type is TokenType.EOF:
                raise self.error("Expected '}' before end of input", tok)
            if tok.is_punct("}"):
                # Tail expression of the enclosing block.
                break
            if tok.is_punct(";"):
                last = self.advance()
                break
            if tok.type is TokenType.PUNCT and tok.value in OPEN_BRACKETS:
                last = self.skip_balanced()
                if is_block and tok.value == "{" and self.current().value not in BLOCK_CONTINUATIONS:
                    break
                continue
            if tok.type is TokenType.PUNCT and tok.value in CLOSE_BRACKETS:
                raise self.error(f"Mismatched '{tok.value}'", tok)
            last = self.advance()
        if last is None:
            raise self.error("Attribute without a statement", first)
        return self.slice(first, last)

    def parse_other(self, start: Token) -> OtherNode:
        keyword = self.current()
        semicolon_only = keyword.type is TokenType.IDENT and keyword.value in SEMICOLON_ITEMS
        while True:
            tok = self.current()
            if tok.type is TokenType.EOF:
                raise self.error("Expected ';' or a block to end the item", keyword)
            if tok.is_punct(";"):
                end = self.advance()
                break
            if tok.type is TokenType.PUNCT and tok.value in OPEN_BRACKETS:
                end = self.skip_balanced()
                if tok.value == "{" and not semicolon_only:
                    break
                continue
            if tok.type is TokenType.PUNCT and tok.value in CLOSE_BRACKETS:
                raise self.error(f"Unexpected '{tok.value}'", tok)
            self.advance()
        return OtherNode(
            text=self.slice(start, end), line=start.line, keyword=keyword.value
        )


def _check_size(source: str) -> None:
    limit = load_config().max_source_bytes
    size = len(source.encode("utf-8", "ignore"))
    if size > limit:
        raise DojoContractError(
            "Source too large",
            code="size_limit",
            context={"bytes": size, "limit": limit},
        )


def parse_items(source: str) -> List[SyntaxNode]:
    """Parse a sequence of top-level items."""
    _check_size(source)
    parser = Parser(source, tokenize(source))
    items = parser.parse_items()
    log.debug("parsed %d top-level item(s)", len(items))
    return items


def parse_item(source: str) -> SyntaxNode:
    """
    Parse exactly one top-level item: the node a contract attribute is
    attached to.

    Raises:
        ParseError if the text is malformed or holds zero/several items.
    """
    items = parse_items(source)
    if len(items) != 1:
        raise ParseError(f"Expected exactly one item, found {len(items)}", line=1, column=1)
    return items[0]


__all__ = ["Parser", "parse_item", "parse_items"]
