from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set

from .tree import Assign, Stmt, Var


MAIN = ""


@dataclass
class FunctionType:
    args: List[Assign] = field(default_factory=list)
    body: List[Stmt] = field(default_factory=list)

    @property
    def param_names(self) -> List[str]:
        return [a.name for a in self.args if isinstance(a, Var)]


class FunctionTable:
    """Maps function names to their parameters and body.

    The anonymous entry (``""``) holds the top-level program. The table is filled
    in while a program is assembled, and only read from afterwards.
    """

    def __init__(self) -> None:
        self._map: Dict[str, FunctionType] = {}

    def __repr__(self):
        return 'FunctionTable(%r)' % list(self._map)

    def __contains__(self, name: str) -> bool:
        return name in self._map

    def __iter__(self) -> Iterator[str]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def check_name(self, name: str) -> bool:
        "Returns True if a function called `name` already exists"
        return name in self._map

    def insert(self, name: str, args: List[Assign], body: List[Stmt]) -> None:
        if name in self._map:
            raise ValueError("Function %r is already defined" % name)
        self._map[name] = FunctionType(list(args), list(body))

    def get(self, name: str) -> Optional[FunctionType]:
        return self._map.get(name)

    def get_main(self) -> List[Stmt]:
        return self._map[MAIN].body

    def get_args_value(self, name: str) -> Optional[int]:
        "Returns the number of parameters of `name`, or None if it isn't defined"
        func = self._map.get(name)
        return len(func.args) if func is not None else None

    def get_args_by_name(self, name: str) -> Set[str]:
        return set(self._map[name].param_names)

    def get_args(self) -> List[str]:
        "Returns the parameter names of every function"
        return [arg for func in self._map.values() for arg in func.param_names]

    def get_all(self) -> Dict[str, FunctionType]:
        return self._map
