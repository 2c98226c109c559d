"""Finds the first error leaf in a parsed line.

Trees are walked depth-first, left operand before right operand, so the error
reported is the first one found by the walk, not necessarily the leftmost one
in the source text.
"""
from typing import Optional

from .tree import Node, Decl, Error, BinOp, Stmt, If, While, Make, AddAssign, Command, Func


def check_expr_err(expr: Node) -> Optional[Error]:
    if isinstance(expr, Error):
        return expr
    if isinstance(expr, BinOp):
        return check_expr_err(expr.left) or check_expr_err(expr.right)
    return None


def check_decl_err(decl: Decl) -> Optional[Error]:
    if isinstance(decl.name, Error):
        return decl.name
    for param in decl.params:
        if isinstance(param, Error):
            return param
    return None


def check_stmt_err(stmt: Stmt) -> Optional[Error]:
    if isinstance(stmt, (If, While)):
        return check_expr_err(stmt.cond)
    if isinstance(stmt, (Make, AddAssign)):
        return check_expr_err(stmt.target) or check_expr_err(stmt.value)
    if isinstance(stmt, Command):
        return check_expr_err(stmt.value)
    if isinstance(stmt, Func):
        err = check_expr_err(stmt.name)
        for arg in stmt.args:
            err = err or check_expr_err(arg)
        return err
    return None
