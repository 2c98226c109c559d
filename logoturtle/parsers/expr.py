"""Prefix-notation expression grammar.

Every parse function takes the line and a position inside it, and returns
``(node, new_position)``, or ``None`` if it doesn't apply at that position.
Operators are always followed by exactly two sub-expressions, so there are no
precedence or associativity rules to deal with.
"""
from typing import Optional, Tuple

from ..enums import ErrorKind
from ..tree import (Expr, Boolean, Float, Var, Error, Span,
                    Add, Sub, Mul, Div, Eq, Ne, Lt, Gt, And, Or,
                    XCor, YCor, Heading, Color)
from ..utils import is_valid_name, to_f32

_Result = Optional[Tuple[Expr, int]]

WHITESPACE = ' \t'
NAME_CHARS = frozenset('abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_')
NUMBER_CHARS = frozenset('0123456789.-')


def skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in WHITESPACE:
        pos += 1
    return pos


def take_until(text: str, pos: int, stop_chars: str) -> int:
    "Returns the position of the first character in `stop_chars`, starting at `pos`"
    while pos < len(text) and text[pos] not in stop_chars:
        pos += 1
    return pos


def match_keyword(text: str, pos: int, keyword: str) -> Optional[Tuple[Span, int]]:
    """Matches `keyword` after optional whitespace.

    Alphabetic keywords must end at a word boundary, so ``XCORD`` isn't read as ``XCOR``.
    Returns the span of the keyword and the position after the trailing whitespace.
    """
    start = skip_ws(text, pos)
    if not text.startswith(keyword, start):
        return None
    end = start + len(keyword)
    if keyword[-1] in NAME_CHARS and end < len(text) and text[end] in NAME_CHARS:
        return None
    return Span(start, len(keyword)), skip_ws(text, end)


def missing_operand(pos: int) -> Error:
    return Error(ErrorKind.MissingOperand, Span(pos, 0))


def _parse_boolean(text, pos):
    for token, value in (('"TRUE', True), ('"FALSE', False)):
        m = match_keyword(text, pos, token)
        if m:
            span, pos = m
            return Boolean(value, span), pos
    return None


def _parse_number(text, pos):
    start = skip_ws(text, pos)
    if not text.startswith('"', start):
        return None
    end = start + 1
    while end < len(text) and text[end] in NUMBER_CHARS:
        end += 1
    if end == start + 1:
        return None

    span = Span(start, end - start)
    try:
        value = float(text[start+1:end])
    except ValueError:
        return Error(ErrorKind.InvalidNumber, span), skip_ws(text, end)
    return Float(to_f32(value), span), skip_ws(text, end)


def _parse_var(text, pos):
    start = skip_ws(text, pos)
    if not text.startswith(':', start):
        return None
    end = take_until(text, start + 1, ': \t')
    if end == start + 1:
        return None

    span = Span(start, end - start)
    name = text[start+1:end]
    if is_valid_name(name):
        return Var(name, span), skip_ws(text, end)
    return Error(ErrorKind.InvalidName, span), skip_ws(text, end)


BINARY_OPERATORS = [
    ('+', Add),
    ('-', Sub),
    ('*', Mul),
    ('/', Div),
    ('EQ', Eq),
    ('NE', Ne),
    ('LT', Lt),
    ('GT', Gt),
    ('AND', And),
    ('OR', Or),
]

def _parse_binary(text, pos):
    for token, node_class in BINARY_OPERATORS:
        m = match_keyword(text, pos, token)
        if m:
            break
    else:
        return None

    op_span, pos = m
    left, pos = parse_expr(text, pos) or (missing_operand(pos), pos)
    right, pos = parse_expr(text, pos) or (missing_operand(pos), pos)

    end = max(s.end for s in (op_span, left.span, right.span) if s.length)
    return node_class(left, right, Span(op_span.start, end - op_span.start)), pos


SYSTEM_READS = [
    ('XCOR', XCor),
    ('YCOR', YCor),
    ('HEADING', Heading),
    ('COLOR', Color),
]

def _parse_system_read(text, pos):
    for token, node_class in SYSTEM_READS:
        m = match_keyword(text, pos, token)
        if m:
            span, pos = m
            return node_class(span), pos
    return None


def _parse_unexpected(text, pos):
    "Absorbs everything up to the next space or `[` as an error leaf"
    start = skip_ws(text, pos)
    end = take_until(text, start, ' \t[')
    if end == start:
        return None
    return Error(ErrorKind.UnexpectedExpr, Span(start, end - start)), skip_ws(text, end)


_ALTERNATIVES = (
    _parse_boolean,
    _parse_number,
    _parse_var,
    _parse_binary,
    _parse_system_read,
    _parse_unexpected,
)

def parse_expr(text: str, pos: int = 0) -> _Result:
    """Parses a single expression starting at `pos`.

    Never fails while there's a character left that isn't whitespace or ``[``:
    anything unrecognized becomes an ``Error`` leaf instead.
    """
    for alternative in _ALTERNATIVES:
        res = alternative(text, pos)
        if res is not None:
            return res
    return None
