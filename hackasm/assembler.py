import logging
from typing import List, Optional, Tuple
from .code import MAX_ADDRESS, encode_address, encode_compute
from .console import Console
from .errors import AddressRangeError, AssemblyError
from .parser import AddressLoad, Compute, Label, Statement, is_instruction, is_numeral, parse
from .symbols import SymbolTable


logger = logging.getLogger(__name__)

Program = List[Tuple[int, Statement]]


class Assembler:
    """
    Two-pass assembler: labels first, then one 16-bit word per instruction.
    >>> a = Assembler()
    >>> words = a.assemble("@i\\nM=1\\n(LOOP)\\n@LOOP\\n0;JMP")
    0000000000010000
    1110111111001000
    0000000000000010
    1110101010000111
    >>> a.symbols.labels, a.symbols.variables
    ({'LOOP': 2}, {'i': 16})
    """
    def __init__(self, console: Optional[Console] = None, symbols: Optional[SymbolTable] = None) -> None:
        """
        :param console: Sink for encoded words; prints to stdout when omitted.
        :param symbols: Starting symbols for every run; copied, never mutated.
        """
        self.console: Console = console or Console()
        self.seed: Optional[SymbolTable] = symbols
        self.symbols: SymbolTable = self.fresh_symbols()
        self.instruction_count: int = 0

    def fresh_symbols(self) -> SymbolTable:
        return self.seed.copy() if self.seed is not None else SymbolTable()

    def first_pass(self, program: Program) -> int:
        """
        Bind every label to the address of the instruction that follows it.
        >>> a = Assembler()
        >>> a.first_pass(parse("// start\\n(TOP)\\n@TOP\\n\\n(MID)\\nD=A\\n(END)"))
        2
        >>> a.symbols.labels
        {'TOP': 0, 'MID': 1, 'END': 2}
        """
        address = 0
        for line_no, statement in program:
            if isinstance(statement, Label):
                if statement.name in self.symbols.labels:
                    logger.warning(f"line {line_no}: label {statement.name} redefined, "
                                   f"{self.symbols.labels[statement.name]} -> {address}")
                if self.symbols.resolve_predefined(statement.name) is not None:
                    logger.warning(f"line {line_no}: label {statement.name} is shadowed by a predefined symbol")
                try:
                    self.symbols.define_label(statement.name, address)
                except AssemblyError as e:
                    raise e.at(line_no, f"({statement.name})")
                logger.debug(f"Label {statement.name} = {address}")
            elif is_instruction(statement):
                address += 1
        self.instruction_count = address
        return address

    def resolve_operand(self, operand: str) -> int:
        """
        >>> a = Assembler()
        >>> a.symbols.define_label("R99", 7)
        >>> [a.resolve_operand(x) for x in ("SP", "R99", "123", "x", "y", "x")]
        [0, 7, 123, 16, 17, 16]
        >>> a.resolve_operand("9" * 6000)
        Traceback (most recent call last):
        ...
        hackasm.errors.AddressRangeError: numeral of 6000 digits does not fit in 15 bits
        """
        value = self.symbols.resolve_predefined(operand)
        if value is not None:
            return value
        if operand in self.symbols.labels:
            return self.symbols.labels[operand]
        if is_numeral(operand):
            digits = operand.lstrip("0")
            if len(digits) > len(str(MAX_ADDRESS)):
                raise AddressRangeError(f"numeral of {len(operand)} digits does not fit in 15 bits")
            return int(digits or "0")
        return self.symbols.resolve_or_allocate_variable(operand)

    def encode(self, statement: Statement) -> str:
        """
        >>> a = Assembler()
        >>> a.encode(AddressLoad("5")), a.encode(Compute("D", "D+1", ""))
        ('0000000000000101', '1110011111010000')
        """
        if isinstance(statement, AddressLoad):
            return encode_address(self.resolve_operand(statement.operand))
        if isinstance(statement, Compute):
            return encode_compute(statement.dest, statement.comp, statement.jump)
        raise AssemblyError(f"not an instruction: {statement!r}")

    def second_pass(self, program: Program) -> List[str]:
        words = []
        for line_no, statement in program:
            if not is_instruction(statement):
                continue
            try:
                word = self.encode(statement)
            except AssemblyError as e:
                raise e.at(line_no, _render(statement))
            logger.debug(f"line {line_no}: {word}")
            self.console.write_word(word)
            words.append(word)
        if len(words) != self.instruction_count:
            raise AssemblyError(f"emitted {len(words)} words for {self.instruction_count} "
                                f"instructions; run first_pass before second_pass")
        return words

    def assemble(self, source: str) -> List[str]:
        """
        Each run starts from a fresh symbol table.
        >>> a = Assembler(Console(capture_output=True))
        >>> a.assemble("(X)\\n@1")
        ['0000000000000001']
        >>> a.assemble("@X")
        ['0000000000010000']
        """
        self.symbols = self.fresh_symbols()
        program = parse(source)
        self.first_pass(program)
        return self.second_pass(program)

    def assemble_file(self, file_path: str) -> List[str]:
        """
        Assemble a source file.
        >>> import os, tempfile
        >>> with tempfile.NamedTemporaryFile("w", suffix=".asm", delete=False) as f:
        ...     _ = f.write("@SCREEN\\nD=A\\n")
        >>> Assembler(Console(capture_output=True)).assemble_file(f.name)
        ['0100000000000000', '1110110000010000']
        >>> os.unlink(f.name)
        """
        return self.assemble(read_source(file_path))


def read_source(file_path: str) -> str:
    """
    >>> import os, tempfile
    >>> with tempfile.NamedTemporaryFile("wb", suffix=".asm", delete=False) as f:
    ...     _ = f.write(b"\\xff\\xfe@1")
    >>> read_source(f.name)  # doctest: +ELLIPSIS
    Traceback (most recent call last):
    ...
    hackasm.errors.AssemblyError: ... is not valid UTF-8 at byte 0
    >>> os.unlink(f.name)
    """
    with open(file_path, encoding="utf-8") as f:
        try:
            source = f.read()
        except UnicodeDecodeError as e:
            raise AssemblyError(f"{file_path} is not valid UTF-8 at byte {e.start}") from None
    logger.debug(f"Read {len(source)} characters from {file_path}")
    return source


def _render(statement: Statement) -> str:
    """
    >>> _render(AddressLoad("x")), _render(Compute("", "D", "JNE")), _render(Compute("M", "D", ""))
    ('@x', 'D;JNE', 'M=D')
    """
    if isinstance(statement, AddressLoad):
        return f"@{statement.operand}"
    if statement.jump:
        return f"{statement.comp};{statement.jump}"
    return f"{statement.dest}={statement.comp}"
