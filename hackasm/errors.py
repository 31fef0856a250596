from typing import Optional


class AssemblyError(Exception):
    """
    Base class for everything that stops an assembly run.
    >>> str(AssemblyError("bad thing"))
    'bad thing'
    >>> str(AssemblyError("bad thing", line_no=3, line="D=X"))
    "line 3: bad thing: 'D=X'"
    """
    def __init__(self, message: str, line_no: Optional[int] = None, line: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line_no = line_no
        self.line = line

    def at(self, line_no: int, line: str) -> 'AssemblyError':
        """Attach source context if none is set yet."""
        if self.line_no is None:
            self.line_no = line_no
            self.line = line
        return self

    def __str__(self) -> str:
        if self.line_no is None:
            return self.message
        return f"line {self.line_no}: {self.message}: {self.line!r}"


class LabelSyntaxError(AssemblyError):
    pass


class InstructionSyntaxError(AssemblyError):
    pass


class UnknownMnemonicError(AssemblyError):
    def __init__(self, field: str, mnemonic: str, **kwargs) -> None:
        super().__init__(f"unknown {field} mnemonic {mnemonic!r}", **kwargs)
        self.field = field
        self.mnemonic = mnemonic


class AddressRangeError(AssemblyError):
    pass


class SymbolError(AssemblyError):
    pass
