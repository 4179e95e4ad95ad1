"""
Scanner primitives and failure tracking for the SGF grammar.

Every rule works on a [ParseState] and a position and returns either the new
position or [FAILED]. Failures are only recorded for error reporting: the
furthest position reached and everything that was expected there.
"""

from contextlib import contextmanager

FAILED = None

WHITESPACE = " \t\r\nv"  # 'v' kept for compatibility, see DESIGN.md
WHITESPACE_DESC = "[ \t\r\nv]"
ANY_CHAR_DESC = "<character>"


class ParseError(Exception):
    """Raised by [sgfpeg.parser.parse()] when the input is not a complete collection."""

    def __init__(self, line: int, column: int, offset: int, expected: set):
        self.line = line
        self.column = column
        self.offset = offset
        self.expected = expected
        super().__init__(line, column, offset, expected)

    def __str__(self):
        message = f"error at {self.line}:{self.column}: expected "
        items = sorted(_escape(x) for x in self.expected)
        if not items:
            return message + "EOF"
        if len(items) == 1:
            return message + f"`{items[0]}`"
        return message + "one of " + ", ".join(f"`{x}`" for x in items)


def _escape(text):
    return text.encode('unicode_escape').decode('ascii')


class ParseState:
    """
    Failure tracker shared by all rules of one parse. Instance attributes:
      - self.text : str -- the complete input.
      - self.max_err_pos : int -- furthest position where something failed.
      - self.expected : set of str -- what would have matched at [max_err_pos].
      - self.suppress_fail : int -- while non-zero, failures are not recorded."""

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)
        self.max_err_pos = 0
        self.expected = set()
        self.suppress_fail = 0

    def mark_failure(self, pos: int, expected: str):
        if self.suppress_fail == 0:
            if pos > self.max_err_pos:
                self.max_err_pos = pos
                self.expected.clear()
            if pos == self.max_err_pos:
                self.expected.add(expected)
        return FAILED

    @contextmanager
    def suppressed(self):
        """Don't record failures of an optional look-ahead."""
        self.suppress_fail += 1
        try:
            yield self
        finally:
            self.suppress_fail -= 1

    def error(self):
        """Build the [ParseError] for the furthest failure seen so far."""
        pos = self.max_err_pos
        line, column = pos_to_line_column(self.text, pos)
        offset = len(self.text[:pos].encode('utf-8'))
        return ParseError(line, column, offset, set(self.expected))


def match_literal(state: ParseState, pos: int, literal: str):
    if state.text.startswith(literal, pos):
        return pos + len(literal)
    return state.mark_failure(pos, literal)


def match_any_char(state: ParseState, pos: int):
    if pos < state.length:
        return pos + 1
    return state.mark_failure(pos, ANY_CHAR_DESC)


def match_char_range(state: ParseState, pos: int, first: str, last: str):
    """Match one character between [first] and [last] inclusive."""
    if pos < state.length and first <= state.text[pos] <= last:
        return pos + 1
    return state.mark_failure(pos, f"[{first}-{last}]")


def skip_whitespace(state: ParseState, pos: int):
    """Zero or more whitespace characters. Never fails."""
    text = state.text
    while pos < state.length and text[pos] in WHITESPACE:
        pos += 1
    state.mark_failure(pos, WHITESPACE_DESC)
    return pos


def pos_to_line_column(text: str, pos: int):
    before = text[:pos]
    line = before.count('\n') + 1
    column = pos - (before.rfind('\n') + 1) + 1
    return line, column
