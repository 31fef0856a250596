from typing import Dict, Optional
import logging
from .errors import SymbolError


logger = logging.getLogger(__name__)

PREDEFINED: Dict[str, int] = {f"R{i}": i for i in range(16)}
PREDEFINED.update({
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    "SCREEN": 16384,
    "KBD": 24576,
})

VARIABLE_BASE = 16


class SymbolTable:
    """
    Per-run symbol state: fixed constants, labels (ROM addresses) and
    variables (RAM addresses handed out from 16 upwards).
    >>> t = SymbolTable()
    >>> t.define_label("LOOP", 4)
    >>> t.resolve_or_allocate_variable("i")
    16
    >>> t.resolve_or_allocate_variable("sum")
    17
    >>> t.resolve_or_allocate_variable("i")
    16
    >>> t.resolve_or_allocate_variable("LOOP")
    4
    >>> t.lookup("KBD"), t.lookup("LOOP"), t.lookup("nope")
    (24576, 4, None)
    """
    def __init__(self) -> None:
        self.labels: Dict[str, int] = {}
        self.variables: Dict[str, int] = {}
        self.next_variable: int = VARIABLE_BASE

    def resolve_predefined(self, name: str) -> Optional[int]:
        """
        >>> t = SymbolTable()
        >>> t.resolve_predefined("R13"), t.resolve_predefined("SCREEN")
        (13, 16384)
        >>> t.define_label("THIS", 99)
        >>> t.resolve_predefined("THIS")
        3
        >>> t.resolve_predefined("R16") is None
        True
        """
        return PREDEFINED.get(name)

    def define_label(self, name: str, address: int) -> None:
        """
        Bind a label, replacing any earlier binding of the same name.
        >>> t = SymbolTable()
        >>> t.define_label("END", 2)
        >>> t.define_label("END", 7)
        >>> t.labels
        {'END': 7}
        >>> _ = t.resolve_or_allocate_variable("x")
        >>> t.define_label("x", 3)
        Traceback (most recent call last):
        ...
        hackasm.errors.SymbolError: 'x' is already a variable
        """
        if name in self.variables:
            raise SymbolError(f"{name!r} is already a variable")
        self.labels[name] = address

    def lookup(self, name: str) -> Optional[int]:
        value = self.resolve_predefined(name)
        if value is not None:
            return value
        if name in self.labels:
            return self.labels[name]
        return self.variables.get(name)

    def resolve_or_allocate_variable(self, name: str) -> int:
        if name in PREDEFINED:
            raise SymbolError(f"{name!r} is predefined and cannot be a variable")
        if name in self.labels:
            return self.labels[name]
        if name not in self.variables:
            self.variables[name] = self.next_variable
            logger.debug(f"Allocated variable {name} at {self.next_variable}")
            self.next_variable += 1
        return self.variables[name]

    def copy(self) -> 'SymbolTable':
        """
        >>> t = SymbolTable()
        >>> t.define_label("START", 0)
        >>> c = t.copy()
        >>> _ = c.resolve_or_allocate_variable("n")
        >>> t.variables, c.variables, c.labels
        ({}, {'n': 16}, {'START': 0})
        """
        other = SymbolTable()
        other.labels = dict(self.labels)
        other.variables = dict(self.variables)
        other.next_variable = self.next_variable
        return other

    def __repr__(self) -> str:
        """
        >>> t = SymbolTable()
        >>> t.define_label("LOOP", 0)
        >>> _ = t.resolve_or_allocate_variable("n")
        >>> print(t)
        labels: LOOP=0
        variables: n=16
        """
        labels = " ".join(f"{k}={v}" for k, v in self.labels.items())
        variables = " ".join(f"{k}={v}" for k, v in self.variables.items())
        return f"labels: {labels}\nvariables: {variables}"
