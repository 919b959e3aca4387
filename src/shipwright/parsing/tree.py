#!/usr/bin/env python3
"""
SHIPWRIGHT TREE BUILDER - The Architect (Phase 1.2)
---------------------------------------------------
Assembles lexed lines into an ordered forest of ParseNodes using a single
linear pass over an explicit stack of open ancestors. Nesting depth never
touches the Python call stack.

Author: Shipwright Team
Date: 2026-10-19
"""

from typing import List, Optional, Tuple

from shipwright.core.errors import MalformedIndentationError
from shipwright.core.models import ParseNode
from shipwright.parsing.lexer import GameLexer, LexedLine
from shipwright.utils.numbers import parse_number


def convenience_value(tokens: List[str], quoted: Tuple[bool, ...]) -> Optional[str]:
    """
    The scalar exposed as ParseNode.value: the single remaining token, or
    an unquoted multi-word name (no quoted or numeric tokens). Anything
    else is a positional tuple and has no single value.
    """
    if len(tokens) == 1:
        return tokens[0]
    if len(tokens) > 1 and not any(quoted):
        if all(parse_number(token) is None for token in tokens):
            return " ".join(tokens)
    return None


class TreeBuilder:
    """
    Stack-driven tree construction. Each entry on the stack is an open
    ancestor paired with its indentation width.
    """

    def __init__(self, lexer: Optional[GameLexer] = None, indent_step: int = 1):
        self.lexer = lexer or GameLexer()
        self.indent_step = indent_step

    def _make_node(self, line: LexedLine) -> ParseNode:
        values = line.tokens[1:]
        quoted = line.quoted[1:]
        return ParseNode(
            key=line.tokens[0],
            values=list(values),
            value=convenience_value(values, quoted),
            line_no=line.line_no,
            quoted=tuple(quoted),
        )

    def parse(self, text: str) -> List[ParseNode]:
        roots: List[ParseNode] = []
        stack: List[Tuple[ParseNode, int]] = []

        for line in self.lexer.lex(text):
            node = self._make_node(line)

            # Close every ancestor at this depth or shallower
            while stack and stack[-1][1] >= line.indent:
                stack.pop()

            if stack:
                parent, parent_indent = stack[-1]
                if line.indent - parent_indent > self.indent_step:
                    raise MalformedIndentationError(
                        line.line_no,
                        detail=f"indent {line.indent} under parent '{parent.key}' at indent {parent_indent}",
                    )
                parent.children.append(node)
            else:
                roots.append(node)

            stack.append((node, line.indent))

        return roots


def parse(text: str, comment_marker: str = "#", tab_width: int = 1, indent_step: int = 1) -> List[ParseNode]:
    """Parses one file's text into its top-level nodes."""
    builder = TreeBuilder(GameLexer(comment_marker, tab_width), indent_step)
    return builder.parse(text)
