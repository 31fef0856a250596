from typing import List
from .assembler import Assembler
from .console import Console


def assemble(source: str) -> List[str]:
    """
    Assemble Hack source text into a list of 16-character binary words.
    >>> assemble("// add\\n@2\\nD=A\\n@3\\nD=D+A\\n@0\\nM=D")
    ['0000000000000010', '1110110000010000', '0000000000000011', '1110000010010000', '0000000000000000', '1110001100001000']
    """
    return Assembler(Console(capture_output=True)).assemble(source)
