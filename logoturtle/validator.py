from typing import List, Sequence

from .enums import ErrorKind
from .exceptions import ParseError, make_error
from .parsers import first_word
from .utils import logger


def _below(line: str) -> str:
    "A context that points at the (missing) line after `line`"
    return line + '\n '

def _above(line: str) -> str:
    "A context that points at the (missing) line before `line`"
    return ' \n' + line


class StructureValidator:
    """
    Checks that a program's lines are balanced before any expression is parsed.
    The only stable public entry point is `StructureValidator.validate(lines)`.

    Checks:
    - ``IF``/``WHILE`` lines end with ``[``
    - every ``]`` closes an open ``IF``/``WHILE``
    - ``TO``/``END`` come in pairs, and aren't nested
    - declarations aren't placed inside an ``IF``/``WHILE`` block
    - nothing is left open at the end of the input
    """

    @classmethod
    def validate(cls, lines: Sequence[str]) -> None:
        validator = cls(lines)
        for idx, sentence in enumerate(lines):
            validator._check_line(idx, sentence)
        validator._check_end()
        logger.debug("Structure of %d lines is balanced", len(lines))

    def __init__(self, lines: Sequence[str]) -> None:
        self.lines = lines
        self.open_blocks: List[int] = []
        self.open_decl = None

    def _error(self, kind, src, line, start, length):
        return make_error(kind, src, line, start, length, cls=ParseError)

    def _check_line(self, idx: int, sentence: str) -> None:
        stripped = sentence.strip()
        keyword = first_word(stripped)

        if keyword in ('IF', 'WHILE'):
            if not stripped.endswith('['):
                src = sentence.rstrip() + '  '
                raise self._error(ErrorKind.MissingLeftBracket, src, idx + 1, len(src) - 1, 1)
            self.open_blocks.append(idx)

        elif stripped.startswith(']'):
            if not self.open_blocks:
                raise self._error(ErrorKind.MissingWhileOrIf, _above(sentence), idx + 1, 0, 1)
            self.open_blocks.pop()

        elif keyword == 'TO':
            if self.open_decl is not None:
                src = _below(self.lines[self.open_decl])
                raise self._error(ErrorKind.MissingEnd, src, idx + 1, len(src) - 1, 1)
            if self.open_blocks:
                src = self.lines[self.open_blocks.pop()] + '\n' + sentence
                raise self._error(ErrorKind.DeclWrongPosition, src, idx + 1,
                                  len(src) - len(sentence), len(sentence))
            self.open_decl = idx

        elif keyword == 'END':
            if self.open_decl is not None and self.open_blocks:
                src = _below(self.lines[self.open_blocks.pop()])
                raise self._error(ErrorKind.MissingRightBracket, src, idx + 1, len(src) - 1, 1)
            if self.open_blocks:
                src = self.lines[self.open_blocks.pop()] + '\n' + sentence
                raise self._error(ErrorKind.DeclWrongPosition, src, idx + 1,
                                  len(src) - len(sentence), len(sentence))
            if self.open_decl is None:
                raise self._error(ErrorKind.MissingTo, _above(sentence), idx + 1, 0, 1)
            self.open_decl = None

    def _check_end(self) -> None:
        if self.open_decl is not None:
            src = _below(self.lines[self.open_decl])
            raise self._error(ErrorKind.MissingEnd, src, 0, len(src) - 1, 1)
        if self.open_blocks:
            src = _below(self.lines[self.open_blocks.pop()])
            raise self._error(ErrorKind.MissingRightBracket, src, 0, len(src) - 1, 1)
