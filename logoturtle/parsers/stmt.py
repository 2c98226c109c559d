"""Statement and declaration-header grammar.

A statement is dispatched on the first word of its line. Any line that doesn't
start with a command keyword is a function call.
"""
from typing import Optional, Tuple

from ..enums import ErrorKind
from ..tree import (Stmt, Decl, Error, Span,
                    If, While, Make, AddAssign, PenUp, PenDown,
                    Forward, Back, Left, Right, SetPenColor, Turn, SetHeading, SetX, SetY,
                    Func)
from .expr import parse_expr, match_keyword, take_until, skip_ws
from .assign import parse_assign, parse_decl_name

_Result = Tuple[Stmt, int]


def first_word(text: str) -> str:
    "Returns the leading keyword of a line, or an empty string"
    start = skip_ws(text, 0)
    return text[start:take_until(text, start, ' \t')]


def _missing(pos: int) -> Error:
    # Points at the character just before the missing operand
    return Error(ErrorKind.MissingOperand, Span(max(pos - 1, 0), 1))


def _operand(text, pos):
    return parse_expr(text, pos) or (_missing(pos), pos)

def _target(text, pos):
    return parse_assign(text, pos) or (_missing(pos), pos)


def _block(node_class):
    def parse(text, pos, line):
        cond, pos = _operand(text, pos)
        return node_class(cond, [], line), pos
    return parse

def _assignment(node_class):
    def parse(text, pos, line):
        target, pos = _target(text, pos)
        value, pos = _operand(text, pos)
        return node_class(target, value, line), pos
    return parse

def _no_operand(node_class):
    def parse(text, pos, line):
        return node_class(line), pos
    return parse

def _command(node_class):
    def parse(text, pos, line):
        value, pos = _operand(text, pos)
        return node_class(value, line), pos
    return parse


STATEMENTS = {
    'IF': _block(If),
    'WHILE': _block(While),
    'MAKE': _assignment(Make),
    'ADDASSIGN': _assignment(AddAssign),
    'PENUP': _no_operand(PenUp),
    'PENDOWN': _no_operand(PenDown),
    'FORWARD': _command(Forward),
    'BACK': _command(Back),
    'LEFT': _command(Left),
    'RIGHT': _command(Right),
    'SETPENCOLOR': _command(SetPenColor),
    'TURN': _command(Turn),
    'SETHEADING': _command(SetHeading),
    'SETX': _command(SetX),
    'SETY': _command(SetY),
}


def _parse_func(text: str, pos: int, line: int) -> Optional[_Result]:
    res = parse_decl_name(text, pos)
    if res is None:
        return None
    name, pos = res

    args = []
    while True:
        res = parse_expr(text, pos)
        if res is None:
            break
        expr, pos = res
        args.append(expr)
    return Func(name, args, line), pos


def parse_stmt(text: str, line: int = 0) -> Optional[_Result]:
    """Parses a whole line as a statement.

    Returns the statement, and the position of the first character it didn't consume.
    ``IF`` and ``WHILE`` are returned with an empty body, which is filled in once
    the closing ``]`` is found.
    """
    for keyword, parse in STATEMENTS.items():
        m = match_keyword(text, 0, keyword)
        if m:
            _span, pos = m
            return parse(text, pos, line)
    return _parse_func(text, 0, line)


def parse_decl(text: str) -> Optional[Tuple[Decl, int]]:
    "Parses a ``TO name \"param ...`` line"
    m = match_keyword(text, 0, 'TO')
    if m is None:
        return None
    _span, pos = m

    name, pos = parse_decl_name(text, pos) or (Error(ErrorKind.MissingName, Span(max(pos - 1, 0), 1)), pos)

    params = []
    while True:
        res = parse_assign(text, pos)
        if res is None:
            break
        param, pos = res
        params.append(param)
    return Decl(name, params), pos
