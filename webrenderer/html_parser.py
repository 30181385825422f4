"""A small, forgiving HTML parser that builds a :class:`DomTree`."""

from __future__ import annotations

from typing import Optional

from .dom_tree import DomTree

VOID_TAGS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    }
)


class HtmlParseError(ValueError):
    """Raised when the markup cannot be parsed."""


def _is_name_char(ch: str) -> bool:
    return ch.isalnum() or ch in "-_"


class HtmlParser:
    """Parses HTML text into a :class:`DomTree`.

    Text inside an element replaces any earlier text of that element; text
    outside every element and comments are dropped.
    """

    def __init__(self, html: str) -> None:
        self._text = html
        self._pos = 0

    def parse(self) -> DomTree:
        tree = DomTree()
        stack: list[int] = []
        self._skip_whitespace()
        while (ch := self._peek()) is not None:
            if ch == "<":
                self._parse_tag(tree, stack)
            elif stack:
                text = self._read_until_tag().strip()
                if text:
                    node = tree.get_node(stack[-1])
                    if node is not None:
                        node.set_text(text)
            else:
                self._read_until_tag()
            self._skip_whitespace()
        return tree

    def _peek(self) -> Optional[str]:
        return self._text[self._pos] if self._pos < len(self._text) else None

    def _next(self) -> Optional[str]:
        ch = self._peek()
        if ch is not None:
            self._pos += 1
        return ch

    def _starts_with(self, s: str) -> bool:
        return self._text.startswith(s, self._pos)

    def _expect(self, expected: str) -> None:
        ch = self._next()
        if ch is None:
            raise HtmlParseError(f"Expected '{expected}', found end of input")
        if ch != expected:
            raise HtmlParseError(f"Expected '{expected}', got '{ch}'")

    def _take_while(self, predicate) -> str:
        start = self._pos
        while (ch := self._peek()) is not None and predicate(ch):
            self._pos += 1
        return self._text[start:self._pos]

    def _skip_whitespace(self) -> None:
        self._take_while(str.isspace)

    def _read_until_tag(self) -> str:
        return self._take_while(lambda ch: ch != "<")

    def _parse_tag(self, tree: DomTree, stack: list[int]) -> None:
        self._next()  # '<'

        if self._starts_with("!--"):
            self._skip_comment()
            return

        if self._peek() == "/":
            self._next()
            tag_name = self._take_while(_is_name_char)
            self._skip_whitespace()
            self._expect(">")
            if stack:
                top = tree.get_node(stack[-1])
                if top is not None and top.tag_name == tag_name:
                    stack.pop()
            return

        tag_name = self._take_while(_is_name_char)
        if not tag_name:
            raise HtmlParseError("Empty tag name")

        node_id = tree.create_node(tag_name)
        node = tree.get_node(node_id)

        while True:
            self._skip_whitespace()
            ch = self._peek()
            if ch is None:
                raise HtmlParseError("Unexpected end of input in tag")
            if ch == ">":
                self._next()
                break
            if ch == "/":
                self._next()
                self._expect(">")
                break
            attribute = self._parse_attribute()
            if attribute is None:
                raise HtmlParseError(f"Unexpected character '{ch}' in tag")
            node.set_attr(*attribute)

        tree.add_node(stack[-1] if stack else None, node_id)

        if tag_name not in VOID_TAGS:
            stack.append(node_id)

    def _parse_attribute(self) -> Optional[tuple[str, str]]:
        name = self._take_while(lambda ch: _is_name_char(ch) or ch == ":")
        if not name:
            return None
        self._skip_whitespace()
        if self._peek() != "=":
            return name, ""
        self._next()
        self._skip_whitespace()
        if self._peek() in ('"', "'"):
            return name, self._parse_quoted()
        return name, self._take_while(
            lambda ch: ch not in ">/" and not ch.isspace()
        )

    def _parse_quoted(self) -> str:
        quote = self._next()
        value = self._take_while(lambda ch: ch != quote)
        self._next()  # closing quote, if present
        return value

    def _skip_comment(self) -> None:
        # Consumes "!--" and the character after it, then honours nesting.
        self._pos = min(self._pos + 4, len(self._text))
        depth = 1
        while depth > 0 and self._pos < len(self._text):
            if self._starts_with("<!--"):
                depth += 1
                self._pos += 4
            elif self._starts_with("-->"):
                depth -= 1
                self._pos += 3
            else:
                self._pos += 1


def parse_html(html: str) -> DomTree:
    """Parse HTML text into a :class:`DomTree`."""
    return HtmlParser(html).parse()