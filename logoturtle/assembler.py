"""Turns the lines of a program into a function table.

Blocks are closed by a ``]`` line that can be arbitrarily far below the line
that opened them, so nesting is rebuilt with two explicit stacks instead of
recursion:

- ``pending`` holds the ``IF``/``WHILE`` statements waiting for their body
- ``accumulators`` holds one statement list per open scope. The bottom one is
  the top-level program (or the body of the declaration in progress).

When a ``]`` is reached, the top accumulator becomes the body of the top
pending statement, which is rebuilt and appended to the accumulator below.
"""
from dataclasses import replace
from typing import List, Optional, Sequence, Union

from .checks import check_decl_err, check_stmt_err
from .enums import ErrorKind
from .exceptions import ParseError, make_error
from .functions import FunctionTable, MAIN
from .parsers import parse_stmt, parse_decl, first_word
from .tree import Comment, Decl, If, While, Stmt, Name
from .utils import logger
from .validator import StructureValidator


class BlockAssembler:
    def __init__(self, lines: Sequence[str]) -> None:
        self.lines = lines
        self.functions = FunctionTable()
        self.pending: List[Union[If, While]] = []
        self.accumulators: List[List[Stmt]] = [[]]
        self.decl: Optional[Decl] = None

    def _error(self, kind, idx, start, length, src=None):
        if src is None:
            src = self.lines[idx]
        return make_error(kind, src, idx + 1, start, length, cls=ParseError)

    def assemble(self) -> FunctionTable:
        for idx, sentence in enumerate(self.lines):
            stripped = sentence.strip()
            if not stripped:
                continue

            if stripped.startswith('//'):
                self.accumulators[-1].append(Comment(stripped[2:].strip(), idx))
            elif stripped == ']':
                self._close_block(idx)
            elif first_word(stripped) == 'TO':
                self._declare(idx)
            elif first_word(stripped) == 'END':
                self._end_declaration(idx)
            else:
                self._statement(idx)

        if self.decl is not None:
            raise make_error(ErrorKind.MissingEnd, ' ', 0, 0, 1, cls=ParseError)
        if self.pending:
            raise make_error(ErrorKind.MissingRightBracket, ' ', 0, 0, 1, cls=ParseError)

        self.functions.insert(MAIN, [], self.accumulators.pop())
        if not self.functions.get_main():
            logger.warning("Program has no top-level statements")
        return self.functions

    def _close_block(self, idx: int) -> None:
        if not self.pending:
            raise self._error(ErrorKind.MissingWhileOrIf, idx, 0, 1)

        body = self.accumulators.pop()
        stmt = self.pending.pop()
        self.accumulators[-1].append(replace(stmt, body=body))

    def _declare(self, idx: int) -> None:
        sentence = self.lines[idx]
        decl, pos = parse_decl(sentence)

        rest = sentence[pos:].rstrip()
        if rest:
            raise self._error(ErrorKind.UnexpectedExtraOperand, idx, pos, len(rest))

        if isinstance(decl.name, Name) and self.functions.check_name(decl.name.name):
            raise self._error(ErrorKind.RepeatFunctionName, idx, *decl.name.span)

        err = check_decl_err(decl)
        if err is not None:
            raise self._error(err.kind, idx, *err.span)

        logger.debug("Line %d: declaring %s(%s)", idx + 1, decl.name.name,
                     ', '.join(p.name for p in decl.params))
        self.decl = decl
        self.accumulators.append([])

    def _end_declaration(self, idx: int) -> None:
        sentence = self.lines[idx]
        if self.decl is None:
            raise self._error(ErrorKind.MissingTo, idx, 0, len(sentence))

        start = sentence.index('END') + 3
        rest = sentence[start:].strip()
        if rest:
            raise self._error(ErrorKind.UnexpectedExtraOperand, idx, sentence.index(rest, start), len(rest))

        decl, self.decl = self.decl, None
        self.functions.insert(decl.name.name, decl.params, self.accumulators.pop())

    def _statement(self, idx: int) -> None:
        sentence = self.lines[idx]
        stmt, pos = parse_stmt(sentence, idx)
        rest = sentence[pos:].rstrip()

        if isinstance(stmt, (If, While)):
            if rest != '[':
                if not rest.endswith('['):
                    src = sentence.rstrip() + '  '
                    raise self._error(ErrorKind.MissingLeftBracket, idx, len(src) - 1, 1, src=src)
                raise self._error(ErrorKind.UnexpectedExtraOperand, idx, pos, len(rest) - 1)

            err = check_stmt_err(stmt)
            if err is not None:
                raise self._error(err.kind, idx, *err.span)

            self.pending.append(stmt)
            self.accumulators.append([])
        else:
            if rest:
                raise self._error(ErrorKind.UnexpectedExtraOperand, idx, pos, len(rest))

            err = check_stmt_err(stmt)
            if err is not None:
                raise self._error(err.kind, idx, *err.span)

            self.accumulators[-1].append(stmt)


def parse_ast(lines: Sequence[str]) -> FunctionTable:
    """Parses a whole program, given as a list of lines.

    Checks that the program is balanced first, then assembles it into a
    function table. Raises ``ParseError`` on the first problem found.
    """
    StructureValidator.validate(lines)
    return BlockAssembler(lines).assemble()
