"Assignment targets (``\"name``) and declaration / call names (``name``)"
from typing import Optional, Tuple

from ..enums import ErrorKind
from ..tree import Assign, DeclName, Var, Name, Error, Span
from ..utils import is_valid_name
from .expr import skip_ws, take_until


def parse_assign(text: str, pos: int = 0) -> Optional[Tuple[Assign, int]]:
    start = skip_ws(text, pos)
    if text.startswith('"', start):
        end = take_until(text, start + 1, '" \t')
        if end > start + 1:
            span = Span(start, end - start)
            name = text[start+1:end]
            if is_valid_name(name):
                return Var(name, span), skip_ws(text, end)
            return Error(ErrorKind.InvalidName, span), skip_ws(text, end)

    end = take_until(text, start, ' \t')
    if end == start:
        return None
    return Error(ErrorKind.UnexpectedAssign, Span(start, end - start)), skip_ws(text, end)


def parse_decl_name(text: str, pos: int = 0) -> Optional[Tuple[DeclName, int]]:
    start = skip_ws(text, pos)
    end = take_until(text, start, ' \t')
    if end == start:
        return None

    span = Span(start, end - start)
    name = text[start:end]
    if is_valid_name(name):
        return Name(name, span), skip_ws(text, end)
    return Error(ErrorKind.InvalidName, span), skip_ws(text, end)
