from typing import List, NamedTuple, Optional, Tuple, Union
from .errors import InstructionSyntaxError, LabelSyntaxError

COMMENT = "//"
RESERVED = set("@()=;/")
DIGITS = set("0123456789")


class Blank(NamedTuple):
    pass


class Comment(NamedTuple):
    text: str


class Label(NamedTuple):
    name: str


class AddressLoad(NamedTuple):
    operand: str


class Compute(NamedTuple):
    dest: str
    comp: str
    jump: str


Statement = Union[Blank, Comment, Label, AddressLoad, Compute]


def is_symbol(text: str) -> bool:
    """
    >>> is_symbol("LOOP"), is_symbol("ponggame.0"), is_symbol("a$b:c_1")
    (True, True, True)
    >>> is_symbol(""), is_symbol("two words"), is_symbol("a/b"), is_symbol("x=1")
    (False, False, False, False)
    """
    if not text:
        return False
    return not any(c.isspace() or c in RESERVED for c in text)


def is_numeral(text: str) -> bool:
    """
    ASCII decimal digits only.
    >>> is_numeral("0042"), is_numeral("²"), is_numeral("1²"), is_numeral("")
    (True, False, False, False)
    """
    return bool(text) and all(c in DIGITS for c in text)


def is_instruction(statement: Statement) -> bool:
    return isinstance(statement, (AddressLoad, Compute))


def parse_line(raw: str, line_no: Optional[int] = None) -> Statement:
    """
    Classify a single source line.
    >>> parse_line("   ")
    Blank()
    >>> parse_line("  // set up")
    Comment(text='set up')
    >>> parse_line("(LOOP)")
    Label(name='LOOP')
    >>> parse_line("@i")
    AddressLoad(operand='i')
    >>> parse_line("AM=M-1")
    Compute(dest='AM', comp='M-1', jump='')
    >>> parse_line("D;JGT")
    Compute(dest='', comp='D', jump='JGT')
    >>> parse_line("D=M // inline comments are not stripped", 7)
    Traceback (most recent call last):
    ...
    hackasm.errors.InstructionSyntaxError: line 7: malformed compute field: 'D=M // inline comments are not stripped'
    """
    line = raw.strip()
    if not line:
        return Blank()
    if line.startswith(COMMENT):
        return Comment(line[len(COMMENT):].strip())
    if line.startswith("("):
        return _parse_label(line, line_no)
    if line.startswith("@"):
        return _parse_address(line, line_no)
    return _parse_compute(line, line_no)


def _parse_label(line: str, line_no: Optional[int]) -> Label:
    """
    >>> _parse_label("(END", 4)
    Traceback (most recent call last):
    ...
    hackasm.errors.LabelSyntaxError: line 4: malformed label declaration: '(END'
    """
    name = line[1:-1] if line.endswith(")") else ""
    if not is_symbol(name):
        raise LabelSyntaxError("malformed label declaration", line_no=line_no, line=line)
    return Label(name)


def _parse_address(line: str, line_no: Optional[int]) -> AddressLoad:
    operand = line[1:]
    if not is_symbol(operand):
        raise InstructionSyntaxError("malformed address operand", line_no=line_no, line=line)
    if operand[0].isdigit() and not is_numeral(operand):
        raise InstructionSyntaxError("malformed numeric operand", line_no=line_no, line=line)
    return AddressLoad(operand)


def _parse_compute(line: str, line_no: Optional[int]) -> Compute:
    """
    >>> _parse_compute("D = D+A", 1)
    Compute(dest='D', comp='D+A', jump='')
    >>> _parse_compute("D=D-1;JNE", 2)
    Traceback (most recent call last):
    ...
    hackasm.errors.InstructionSyntaxError: line 2: expected dest=comp or comp;jump: 'D=D-1;JNE'
    >>> _parse_compute("D", 3)
    Traceback (most recent call last):
    ...
    hackasm.errors.InstructionSyntaxError: line 3: expected dest=comp or comp;jump: 'D'
    """
    has_dest = line.count("=") == 1
    has_jump = line.count(";") == 1
    if has_dest == has_jump or line.count("=") + line.count(";") != 1:
        raise InstructionSyntaxError("expected dest=comp or comp;jump", line_no=line_no, line=line)
    if has_dest:
        dest, comp = (part.strip() for part in line.split("="))
        jump = ""
    else:
        comp, jump = (part.strip() for part in line.split(";"))
        dest = ""
    if not comp or not (dest or jump) or any(c.isspace() for c in dest + comp + jump):
        raise InstructionSyntaxError("malformed compute field", line_no=line_no, line=line)
    return Compute(dest, comp, jump)


def parse(source: str) -> List[Tuple[int, Statement]]:
    """
    >>> parse("@2\\n\\n(END)\\n0;JMP")
    [(1, AddressLoad(operand='2')), (2, Blank()), (3, Label(name='END')), (4, Compute(dest='', comp='0', jump='JMP'))]
    """
    return [(n, parse_line(raw, n)) for n, raw in enumerate(source.splitlines(), start=1)]
