"""Delimiter-based lexer.

The input is split on a fixed set of single-character delimiters. Each
delimiter is emitted as its own token and every token is trimmed, so runs of
letters, digits and dots (``sin``, ``pi``, ``3.25``) come out whole.
"""

from __future__ import annotations

from collections.abc import Iterator

DELIMITERS = frozenset("()[]-+*/^%,! ")


class ExpressionTokenizer:
    """Lazy token sequence over one expression.

    Iteration always starts again from the beginning of the expression.
    Whitespace-only runs are emitted as empty strings; consumers skip them.
    """

    def __init__(self, expression: str):
        self.expression = expression

    def __iter__(self) -> Iterator[str]:
        for _, text in self.scan():
            yield text

    def scan(self) -> Iterator[tuple[int, str]]:
        """Yield ``(position, text)`` pairs, position being the offset of the trimmed text."""
        expression = self.expression
        start = 0
        for index, ch in enumerate(expression):
            if ch in DELIMITERS:
                if index > start:
                    yield _trimmed(expression[start:index], start)
                yield index, ch.strip()
                start = index + 1
        if start < len(expression):
            yield _trimmed(expression[start:], start)

    def __repr__(self) -> str:
        return f"ExpressionTokenizer({self.expression!r})"


def _trimmed(raw: str, start: int) -> tuple[int, str]:
    stripped = raw.lstrip()
    return start + len(raw) - len(stripped), stripped.rstrip()


def tokenize(expression: str) -> list[str]:
    """Split an expression into trimmed raw tokens, empty tokens included."""
    return list(ExpressionTokenizer(expression))
