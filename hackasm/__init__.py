# hackasm/__init__.py
from .symbols import SymbolTable, PREDEFINED
from .parser import parse, parse_line, Blank, Comment, Label, AddressLoad, Compute
from .code import encode_address, encode_compute, COMP, DEST, JUMP
from .console import Console
from .assembler import Assembler
from .asm import assemble
from .errors import (AssemblyError, LabelSyntaxError, InstructionSyntaxError,
                     UnknownMnemonicError, AddressRangeError, SymbolError)
