from typing import Dict
from .errors import AddressRangeError, UnknownMnemonicError

MAX_ADDRESS = 0x7fff

COMP: Dict[str, str] = {
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",
    "D":   "0001100",
    "A":   "0110000",
    "M":   "1110000",
    "!D":  "0001101",
    "!A":  "0110001",
    "!M":  "1110001",
    "-D":  "0001111",
    "-A":  "0110011",
    "-M":  "1110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "M+1": "1110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "M-1": "1110010",
    "D+A": "0000010",
    "D+M": "1000010",
    "D-A": "0010011",
    "D-M": "1010011",
    "A-D": "0000111",
    "M-D": "1000111",
    "D&A": "0000000",
    "D&M": "1000000",
    "D|A": "0010101",
    "D|M": "1010101",
}

# bits: A D M
DEST: Dict[str, str] = {
    "":    "000",
    "M":   "001",
    "D":   "010",
    "MD":  "011",
    "A":   "100",
    "AM":  "101",
    "AD":  "110",
    "AMD": "111",
}

JUMP: Dict[str, str] = {
    "":    "000",
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
}


def encode_address(value: int) -> str:
    """
    Encode an address-load instruction: a zero top bit and 15 address bits.
    >>> encode_address(5)
    '0000000000000101'
    >>> encode_address(24576)
    '0110000000000000'
    >>> encode_address(32768)
    Traceback (most recent call last):
    ...
    hackasm.errors.AddressRangeError: address 32768 does not fit in 15 bits
    """
    if not 0 <= value <= MAX_ADDRESS:
        raise AddressRangeError(f"address {value} does not fit in 15 bits")
    return f"0{value:015b}"


def encode_compute(dest: str, comp: str, jump: str) -> str:
    """
    >>> encode_compute("D", "D+1", "")
    '1110011111010000'
    >>> encode_compute("", "0", "JMP")
    '1110101010000111'
    >>> encode_compute("AMD", "M-D", "")
    '1111000111111000'
    >>> encode_compute("D", "X", "")
    Traceback (most recent call last):
    ...
    hackasm.errors.UnknownMnemonicError: unknown comp mnemonic 'X'
    """
    return "111" + _lookup(COMP, "comp", comp) + _lookup(DEST, "dest", dest) + _lookup(JUMP, "jump", jump)


def _lookup(table: Dict[str, str], field: str, mnemonic: str) -> str:
    try:
        return table[mnemonic]
    except KeyError:
        raise UnknownMnemonicError(field, mnemonic) from None
