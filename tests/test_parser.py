from pathlib import Path

from simulator.parser import parse, parse_file, parse_options, strip_comment
from simulator.transition_table import Move, TransitionRule

PROGRAMS = Path(__file__).resolve().parent.parent / "programs"


def test_defaults_when_text_is_empty():
    table = parse("")
    assert table.initial_state == "right"
    assert table.blank_symbol == "_"
    assert table.initial_tape == ("1", "0", "1", "1")
    assert len(table) == 0
    assert table.warnings == ()


def test_empty_input_falls_back_to_demo_tape():
    table = parse('input: ""\nstart state: a\na:\n  x: {N: a}\n')
    assert table.initial_tape == ("1", "0", "1", "1")


def test_binary_increment_program():
    table = parse_file(PROGRAMS / "binary_increment.tm")
    assert table.initial_state == "right"
    assert table.blank_symbol == "_"
    assert table.initial_tape == ("1", "0", "1", "1")
    assert len(table) == 9
    assert table.warnings == ()
    assert table.rules[0] == TransitionRule("right", "1", "1", Move.RIGHT, "right")
    assert table.lookup("carry", "1") == TransitionRule("carry", "1", "0", Move.LEFT, "carry")
    assert table.lookup("carry", "_") == TransitionRule("carry", "_", "1", Move.LEFT, "done")
    assert table.lookup("done", "0").move == Move.NONE


def test_single_quotes_and_start_state():
    table = parse("input: '01'\nblank: 'B'\nstart state: q0\n")
    assert table.initial_tape == ("0", "1")
    assert table.blank_symbol == "B"
    assert table.initial_state == "q0"


def test_bracket_list_shares_one_rule():
    table = parse("s:\n  [a, b, c]: {write: x, R: t}\n")
    assert [rule.read_symbol for rule in table.rules] == ["a", "b", "c"]
    assert all(rule.write_symbol == "x" and rule.to_state == "t" for rule in table.rules)


def test_empty_symbol_means_blank_even_when_declared_later():
    table = parse("s:\n  [1, ]: {R: s}\n  '': {write: '', N: s}\nblank: \"B\"\n")
    assert [rule.read_symbol for rule in table.rules] == ["1", "B"]
    assert table.lookup("s", "B").write_symbol == "B"


def test_write_defaults_to_read_symbol():
    table = parse("s:\n  1: {R: s}\n")
    assert table.rules[0].write_symbol == "1"


def test_missing_move_clause_is_skipped_with_warning():
    table = parse("s:\n  1: {write: 0}\n  0: {L: s}\n")
    assert len(table) == 1
    assert table.warnings[0].line_number == 2
    assert "move" in table.warnings[0].reason


def test_unrecognized_lines_never_raise():
    text = "this is not a rule\ns:\n  1: {R: s}\n  stray words\n}}}\n"
    table = parse(text)
    assert len(table) == 1
    assert [w.line_number for w in table.warnings] == [1, 4, 5]


def test_rule_outside_state_block():
    table = parse("1: {R: s}\n")
    assert len(table) == 0
    assert table.warnings[0].reason == "rule outside of a state block"


def test_duplicate_rule_last_one_wins_and_is_reported():
    table = parse("s:\n  1: {R: a}\n  0: {R: s}\n  1: {L: b}\n")
    assert [rule.read_symbol for rule in table.rules] == ["1", "0"]
    assert table.lookup("s", "1").to_state == "b"
    assert len(table.warnings) == 1
    assert table.warnings[0].line_number == 4
    assert "duplicate" in table.warnings[0].reason


def test_blank_must_be_one_character():
    table = parse('blank: "ab"\n')
    assert table.blank_symbol == "_"
    assert "single character" in table.warnings[0].reason


def test_unquoted_input_is_skipped():
    table = parse("input: 0101\n")
    assert table.initial_tape == ("1", "0", "1", "1")
    assert len(table.warnings) == 1


def test_comments_are_stripped():
    assert strip_comment("  1: {R: s}  # move on") == "  1: {R: s}  "
    assert strip_comment("# whole line") == ""
    assert strip_comment("'#': {R: s}") == "'#': {R: s}"
    table = parse("s: # scanning\n  '#': {R: s} # hash mark\n")
    assert table.rules[0].read_symbol == "#"
    assert table.rules[0].from_state == "s"


def test_parse_options():
    assert parse_options("{write: 0, L: done}") == ("0", Move.LEFT, "done")
    assert parse_options("{R: right}") == (None, Move.RIGHT, "right")
    assert parse_options("{N: halt, R: other}") == (None, Move.NONE, "halt")
    assert parse_options("{write: 1}") == ("1", None, None)


def test_quoted_symbol_containing_colon():
    table = parse("s:\n  ':': {write: ',', R: s}\n")
    assert table.rules[0].read_symbol == ":"
    assert table.rules[0].write_symbol == ","
    assert table.rules[0].to_state == "s"


def test_quoted_comma_and_brace_in_options_and_lists():
    table = parse("s:\n  [',', '}', ']']: {write: '}', R: t}\n  1: {write: ',', L: s}\n")
    assert table.warnings == ()
    assert [rule.read_symbol for rule in table.rules] == [",", "}", "]", "1"]
    assert all(rule.write_symbol == "}" and rule.to_state == "t" for rule in table.rules[:3])
    assert table.lookup("s", "1").write_symbol == ","
    assert table.lookup("s", "1").move == Move.LEFT


def test_parse_options_ignores_quoted_separators():
    assert parse_options("{write: '}', R: s}") == ("}", Move.RIGHT, "s")
    assert parse_options("{write: \",\", N: done}") == (",", Move.NONE, "done")
