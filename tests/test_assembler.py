import pytest
from hackasm import (Assembler, AssemblyError, Console, PREDEFINED, SymbolTable, assemble, parse,
                     AddressRangeError, InstructionSyntaxError, LabelSyntaxError,
                     UnknownMnemonicError)
from hackasm.parser import is_instruction

MAX = """// Computes R2 = max(R0, R1)
   @R0
   D=M
   @R1
   D=D-M
   @OUTPUT_FIRST
   D;JGT
   @R1
   D=M
   @OUTPUT_D
   0;JMP
(OUTPUT_FIRST)
   @R0
   D=M
(OUTPUT_D)
   @R2
   M=D
(INFINITE_LOOP)
   @INFINITE_LOOP
   0;JMP
"""

MAX_HACK = [
    "0000000000000000",
    "1111110000010000",
    "0000000000000001",
    "1111010011010000",
    "0000000000001010",
    "1110001100000001",
    "0000000000000001",
    "1111110000010000",
    "0000000000001100",
    "1110101010000111",
    "0000000000000000",
    "1111110000010000",
    "0000000000000010",
    "1110001100001000",
    "0000000000001110",
    "1110101010000111",
]


def test_max_program():
    assert assemble(MAX) == MAX_HACK


def test_word_count_matches_instruction_lines():
    program = parse(MAX)
    a = Assembler(Console(capture_output=True))
    count = a.first_pass(program)
    assert count == sum(1 for _, s in program if is_instruction(s))
    assert len(a.second_pass(program)) == count == 16


def test_predefined_ignore_labels_and_variables():
    a = Assembler(Console(capture_output=True))
    a.assemble("(SCREEN)\n@KBD\n@THIS\n")
    for name, value in PREDEFINED.items():
        assert a.symbols.resolve_predefined(name) == value
        assert a.resolve_operand(name) == value
    assert a.symbols.variables == {}


def test_variables_allocated_in_first_use_order():
    a = Assembler(Console(capture_output=True))
    words = a.assemble("@b\n@a\n@b\n@c\n@a\n")
    assert a.symbols.variables == {"b": 16, "a": 17, "c": 18}
    assert [int(w, 2) for w in words] == [16, 17, 16, 18, 17]


def test_forward_label_reference():
    source = "@LOOP\n0;JMP\n// skipped\n\n@5\n(LOOP)\nD=A\n"
    words = assemble(source)
    assert words[0] == "0000000000000011"
    assert len(words) == 4


def test_label_shadows_variable_name_in_later_use():
    words = assemble("@x\n(x)\nD=A\n")
    assert words[0] == "0000000000000001"


def test_duplicate_label_keeps_last_definition(caplog):
    words = assemble("(A1)\n@A1\n(A1)\n@A1\n")
    assert words == ["0000000000000001", "0000000000000001"]
    assert "redefined" in caplog.text


@pytest.mark.parametrize("line,word", [
    ("D=D+1", "1110011111010000"),
    ("@5", "0000000000000101"),
    ("0;JMP", "1110101010000111"),
    ("MD=-1", "1110111010011000"),
    ("M=-M", "1111110011001000"),
    ("D;JLE", "1110001100000110"),
])
def test_single_instructions(line, word):
    assert assemble(line) == [word]


def test_unknown_mnemonic_is_fatal():
    with pytest.raises(UnknownMnemonicError) as e:
        assemble("@1\nD=X\n")
    assert e.value.line_no == 2
    assert e.value.field == "comp"
    with pytest.raises(UnknownMnemonicError):
        assemble("Q=D")
    with pytest.raises(UnknownMnemonicError):
        assemble("D;JMPX")


def test_words_before_failure_are_emitted():
    console = Console(capture_output=True)
    with pytest.raises(UnknownMnemonicError):
        Assembler(console).assemble("@1\nD=A\nD=X\n@2\n")
    assert console.output_buffer == ["0000000000000001", "1110110000010000"]


def test_address_out_of_range():
    assert assemble("@32767") == ["0111111111111111"]
    with pytest.raises(AddressRangeError) as e:
        assemble("@32768")
    assert e.value.line_no == 1


@pytest.mark.parametrize("line", ["(LOOP", "()", "(TWO WORDS)", "(A)B"])
def test_malformed_label(line):
    with pytest.raises(LabelSyntaxError) as e:
        assemble(line)
    assert line in str(e.value)


@pytest.mark.parametrize("line", ["@", "@12ab", "D", "D=A;JMP", "A=D=M", "=D", "D;", "/ not a comment"])
def test_malformed_instruction(line):
    with pytest.raises(InstructionSyntaxError):
        assemble(line)


def test_only_full_line_double_slash_comments():
    assert assemble("  // comment\n//\n@1\n") == ["0000000000000001"]
    with pytest.raises(InstructionSyntaxError):
        assemble("@1 // trailing comment")


def test_fresh_symbol_tables_do_not_share_state():
    first = Assembler(Console(capture_output=True))
    first.assemble("@x\n")
    second = Assembler(Console(capture_output=True), symbols=SymbolTable())
    second.assemble("@y\n")
    assert first.symbols.variables == {"x": 16}
    assert second.symbols.variables == {"y": 16}


@pytest.mark.parametrize("line", ["@²", "@1²", "@٣"])
def test_non_ascii_digits_are_rejected(line):
    with pytest.raises(InstructionSyntaxError):
        assemble(line)


def test_oversized_numeral_is_a_range_error():
    with pytest.raises(AddressRangeError) as e:
        assemble("@" + "1" * 5000)
    assert e.value.line_no == 1
    assert assemble("@" + "0" * 5000 + "7") == ["0000000000000111"]


def test_reused_assembler_starts_each_run_fresh():
    a = Assembler(Console(capture_output=True))
    a.assemble("(X)\n@1\n")
    assert a.assemble("@X\n") == ["0000000000010000"]
    a.assemble("@x\n")
    assert a.assemble("(x)\n@x\n") == ["0000000000000000"]
    assert a.symbols.variables == {}


def test_seed_symbols_are_copied_not_mutated():
    seed = SymbolTable()
    seed.define_label("ENTRY", 3)
    a = Assembler(Console(capture_output=True), symbols=seed)
    assert a.assemble("@ENTRY\n@v\n") == ["0000000000000011", "0000000000010000"]
    assert a.assemble("@w\n") == ["0000000000010000"]
    assert seed.variables == {}


def test_second_pass_requires_first_pass():
    a = Assembler(Console(capture_output=True))
    with pytest.raises(AssemblyError, match="first_pass"):
        a.second_pass(parse("@1\n"))
