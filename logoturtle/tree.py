"""
    Nodes of a parsed program.

    Expressions, assignment targets, declaration names and statements are small
    frozen dataclasses. Each node class has a ``data`` attribute, used by
    ``Interpreter`` and ``Transpiler`` to pick the method that handles it.

    Nodes are never modified after construction. Block bodies are filled in by
    building a new node with ``dataclasses.replace()``.
"""

from dataclasses import dataclass, field, fields
from typing import List, NamedTuple, Union

from .enums import ErrorKind


class Span(NamedTuple):
    "Location of a node inside its source line, as (start, length)"
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


class Node:
    data = 'node'

    def _pretty(self, level, indent_str):
        l = [indent_str*level, type(self).__name__]
        inline = []
        children = []
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in ('span', 'line'):
                continue
            if isinstance(value, Node):
                children.append(value)
            elif isinstance(value, list):
                children += value
            else:
                inline.append('%s' % (value.name if isinstance(value, ErrorKind) else value,))
        if inline:
            l += ['\t', ' '.join(inline)]
        l.append('\n')
        for n in children:
            l += n._pretty(level+1, indent_str)
        return l

    def pretty(self, indent_str: str='  ') -> str:
        """Returns an indented string representation of the node.

        Great for debugging.
        """
        return ''.join(self._pretty(0, indent_str))


#
#   Expressions
#
class Expr(Node):
    pass

@dataclass(frozen=True)
class Boolean(Expr):
    data = 'boolean'
    value: bool
    span: Span

@dataclass(frozen=True)
class Float(Expr):
    data = 'float'
    value: float
    span: Span

@dataclass(frozen=True)
class Var(Expr):
    "A variable reference (``:name``), or an assignment target (``\"name``)"
    data = 'var'
    name: str
    span: Span

@dataclass(frozen=True)
class Error(Expr):
    """A piece of text that could not be parsed.

    Errors are valid leaves: the parser keeps going, and the first error in the
    tree is reported after the whole line is parsed.
    """
    data = 'error'
    kind: ErrorKind
    span: Span


@dataclass(frozen=True)
class BinOp(Expr):
    left: Expr
    right: Expr
    span: Span

class Add(BinOp):
    data = 'add'

class Sub(BinOp):
    data = 'sub'

class Mul(BinOp):
    data = 'mul'

class Div(BinOp):
    data = 'div'

class Eq(BinOp):
    data = 'eq'

class Ne(BinOp):
    data = 'ne'

class Lt(BinOp):
    data = 'lt'

class Gt(BinOp):
    data = 'gt'

class And(BinOp):
    data = 'and_'

class Or(BinOp):
    data = 'or_'


@dataclass(frozen=True)
class SystemRead(Expr):
    span: Span

class XCor(SystemRead):
    data = 'xcor'

class YCor(SystemRead):
    data = 'ycor'

class Heading(SystemRead):
    data = 'heading'

class Color(SystemRead):
    data = 'color'


@dataclass(frozen=True)
class Name(Node):
    "A function name, in a declaration or a call"
    data = 'name'
    name: str
    span: Span


Assign = Union[Var, Error]
DeclName = Union[Name, Error]


#
#   Statements
#
class Stmt(Node):
    pass

@dataclass(frozen=True)
class If(Stmt):
    data = 'if_block'
    cond: Expr
    body: List[Stmt]
    line: int

@dataclass(frozen=True)
class While(Stmt):
    data = 'while_block'
    cond: Expr
    body: List[Stmt]
    line: int

@dataclass(frozen=True)
class Make(Stmt):
    data = 'make'
    target: Assign
    value: Expr
    line: int

@dataclass(frozen=True)
class AddAssign(Stmt):
    data = 'add_assign'
    target: Assign
    value: Expr
    line: int

@dataclass(frozen=True)
class PenUp(Stmt):
    data = 'pen_up'
    line: int

@dataclass(frozen=True)
class PenDown(Stmt):
    data = 'pen_down'
    line: int


@dataclass(frozen=True)
class Command(Stmt):
    "A command taking a single numeric operand"
    value: Expr
    line: int

class Motion(Command):
    data = 'motion'
    angle = 0

class Forward(Motion):
    angle = 0

class Back(Motion):
    angle = 180

class Left(Motion):
    angle = -90

class Right(Motion):
    angle = 90

class SetPenColor(Command):
    data = 'set_pen_color'

class Turn(Command):
    data = 'turn'

class SetHeading(Command):
    data = 'set_heading'

class SetX(Command):
    data = 'set_x'

class SetY(Command):
    data = 'set_y'


@dataclass(frozen=True)
class Func(Stmt):
    data = 'func'
    name: DeclName
    args: List[Expr]
    line: int

@dataclass(frozen=True)
class Comment(Stmt):
    data = 'comment'
    text: str
    line: int


@dataclass(frozen=True)
class Decl(Node):
    "The header of a ``TO`` declaration. The body is kept in the function table."
    data = 'decl'
    name: DeclName
    params: List[Assign] = field(default_factory=list)
