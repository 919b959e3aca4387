#!/usr/bin/env python3
"""
SHIPWRIGHT LEXER - Token Sharder (Phase 1.1)
--------------------------------------------
Decomposes raw game-data text into lexed lines: an indentation width plus
the whitespace-separated tokens of the line. Double-quoted and
backtick-quoted spans survive as single tokens, so names such as
"Heavy Laser Turret" are never split.

Author: Shipwright Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

QUOTE_CHARS = ('"', '`')


@dataclass
class LexedLine:
    """A non-blank, non-comment source line after tokenization."""
    line_no: int
    indent: int
    tokens: List[str]
    quoted: Tuple[bool, ...]


class GameLexer:
    """
    Turns text into LexedLines. Stateless between calls; blank lines and
    comment lines are dropped here so the tree builder never sees them.
    """

    def __init__(self, comment_marker: str = "#", tab_width: int = 1):
        if not comment_marker:
            raise ValueError("comment_marker must be a non-empty string")
        self.comment_marker = comment_marker
        self.tab_width = tab_width

    def _clean_artifacts(self, text: str) -> str:
        """
        Removes invisible UTF-8 BOM markers and standardizes line endings.
        """
        text = text.lstrip('\ufeff')
        return text.replace('\r\n', '\n').replace('\r', '\n')

    def measure_indent(self, line: str) -> Tuple[int, str]:
        """Returns (indent width in columns, remainder of the line)."""
        width = 0
        for i, char in enumerate(line):
            if char == '\t':
                width += self.tab_width
            elif char == ' ':
                width += 1
            else:
                return width, line[i:]
        return width, ""

    def is_comment(self, content: str) -> bool:
        return content.startswith(self.comment_marker)

    def tokenize(self, content: str) -> Tuple[List[str], Tuple[bool, ...]]:
        """
        Splits a line on whitespace, keeping quoted spans whole.
        A comment marker that opens a new token ends the line.
        An unterminated quote runs to the end of the line.
        """
        tokens: List[str] = []
        quoted: List[bool] = []
        i = 0
        length = len(content)

        while i < length:
            char = content[i]
            if char.isspace():
                i += 1
                continue

            if char in QUOTE_CHARS:
                end = content.find(char, i + 1)
                if end == -1:
                    end = length
                tokens.append(content[i + 1:end])
                quoted.append(True)
                i = end + 1
                continue

            if content.startswith(self.comment_marker, i):
                break

            start = i
            while i < length and not content[i].isspace():
                i += 1
            tokens.append(content[start:i])
            quoted.append(False)

        return tokens, tuple(quoted)

    def lex(self, text: str) -> Iterator[LexedLine]:
        """
        Yields one LexedLine per meaningful source line, in file order.
        This is the primary interface for the TreeBuilder.
        """
        clean_text = self._clean_artifacts(text)

        for i, raw_line in enumerate(clean_text.split('\n'), 1):
            indent, content = self.measure_indent(raw_line.rstrip())
            if not content or self.is_comment(content):
                continue

            tokens, quoted = self.tokenize(content)
            if not tokens:
                continue

            yield LexedLine(line_no=i, indent=indent, tokens=tokens, quoted=quoted)
