from .expr import parse_expr
from .assign import parse_assign, parse_decl_name
from .stmt import parse_stmt, parse_decl, first_word
