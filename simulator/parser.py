"""Parser for the indentation-light rule-table format.

    input: "1011"
    blank: "_"
    start state: right
    table:
      right:
        [1, 0]: {R: right}
        _: {L: carry}

Unrecognized lines are never fatal: they are skipped and reported as
ParseWarning entries on the resulting TransitionTable.
"""

import re
from pathlib import Path

from simulator.transition_table import (
    DEFAULT_BLANK,
    DEFAULT_INITIAL_STATE,
    DEFAULT_TAPE,
    Move,
    ParseWarning,
    TransitionRule,
    TransitionTable,
)

QUOTED_VALUE = re.compile(r"""['"]([^'"]*)['"]""")
START_STATE = re.compile(r"start state:\s*(\w+)")
QUOTES = "'\""


def strip_comment(line):
    """Drop a '#' comment that starts the line or follows whitespace, outside quotes."""
    quote = None
    for index, char in enumerate(line):
        if quote:
            if char == quote:
                quote = None
        elif char in QUOTES:
            quote = char
        elif char == "#" and (index == 0 or line[index - 1].isspace()):
            return line[:index]
    return line


def find_outside_quotes(text, target, start=0):
    """Index of the first target character not inside quotes, or -1."""
    quote = None
    for index in range(start, len(text)):
        char = text[index]
        if quote:
            if char == quote:
                quote = None
        elif char in QUOTES:
            quote = char
        elif char == target:
            return index
    return -1


def split_outside_quotes(text, separator=","):
    parts = []
    start = 0
    index = find_outside_quotes(text, separator)
    while index != -1:
        parts.append(text[start:index])
        start = index + 1
        index = find_outside_quotes(text, separator, start)
    parts.append(text[start:])
    return parts


def unquote(token):
    token = token.strip()
    if len(token) >= 2 and token[0] == token[-1] and token[0] in QUOTES:
        return token[1:-1]
    return token


def parse_options(options):
    """Split '{write: x, R: next}' into (write, move, next_state).

    The first write and the first L/R/N clause win; missing parts are None.
    """
    body = options.strip()
    if body.startswith("{"):
        body = body[1:]
    close = find_outside_quotes(body, "}")
    if close != -1:
        body = body[:close]

    write = move = next_state = None
    for part in split_outside_quotes(body):
        key, sep, value = part.partition(":")
        key, value = key.strip(), value.strip()
        if not sep or not value:
            continue
        if key == "write" and write is None:
            write = unquote(value)
        elif key in ("L", "R", "N") and move is None:
            move, next_state = Move(key), value.split()[0]
    return write, move, next_state


class RuleTableParser:
    def __init__(self, text):
        self.lines = text.splitlines()
        self.initial_state = DEFAULT_INITIAL_STATE
        self.blank = DEFAULT_BLANK
        self.input = ""
        self.current_state = None
        self.pending = []
        self.warnings = []

    def warn(self, line_number, line, reason):
        self.warnings.append(ParseWarning(line_number, line, reason))

    def parse(self):
        for line_number, raw in enumerate(self.lines, start=1):
            line = strip_comment(raw).strip()
            if line:
                self._parse_line(line_number, line)
        return self._build()

    def _parse_line(self, line_number, line):
        if line.startswith("input:"):
            value = self._quoted(line_number, line, "input:")
            if value is not None:
                self.input = value
        elif line.startswith("blank:"):
            value = self._quoted(line_number, line, "blank:")
            if value is None:
                return
            if len(value) != 1:
                self.warn(line_number, line, "blank symbol must be a single character")
            else:
                self.blank = value
        elif line.startswith("start state:"):
            match = START_STATE.match(line)
            if match:
                self.initial_state = match.group(1)
            else:
                self.warn(line_number, line, "missing start state name")
        elif line == "table:":
            return
        elif line.endswith(":") and "{" not in line:
            name = line[:-1].strip()
            if name:
                self.current_state = name
            else:
                self.warn(line_number, line, "empty state name")
        elif "{" in line or "[" in line:
            if self.current_state is None:
                self.warn(line_number, line, "rule outside of a state block")
            else:
                self._parse_rule(line_number, line)
        else:
            self.warn(line_number, line, "unrecognized line")

    def _quoted(self, line_number, line, prefix):
        match = QUOTED_VALUE.match(line[len(prefix):].strip())
        if match is None:
            self.warn(line_number, line, f"expected a quoted value after '{prefix}'")
            return None
        return match.group(1)

    def _split_symbols(self, line):
        """Return (symbols, options) for the left and right side of a rule line."""
        if line.startswith("["):
            close = find_outside_quotes(line, "]", 1)
            if close == -1:
                return None, "unterminated symbol list"
            symbols = [unquote(s) for s in split_outside_quotes(line[1:close])]
            rest = line[close + 1:].lstrip()
        elif line[0] in QUOTES:
            close = line.find(line[0], 1)
            if close == -1:
                return None, "unterminated quoted symbol"
            symbols = [line[1:close]]
            rest = line[close + 1:].lstrip()
        else:
            symbol, sep, options = line.partition(":")
            return [symbol.strip()], options
        if not rest.startswith(":"):
            return None, "expected ':' after symbol"
        return symbols, rest[1:]

    def _parse_rule(self, line_number, line):
        symbols, options = self._split_symbols(line)
        if symbols is None:
            self.warn(line_number, line, options)
            return
        write, move, next_state = parse_options(options)
        if move is None:
            self.warn(line_number, line, "no L/R/N move clause")
            return
        for symbol in symbols:
            self.pending.append((line_number, line, self.current_state, symbol, write, move, next_state))

    def _build(self):
        # Empty symbols mean blank, which may be declared after the table.
        rules = {}
        for line_number, line, state, symbol, write, move, next_state in self.pending:
            symbol = symbol or self.blank
            if write is None:
                write = symbol
            elif write == "":
                write = self.blank
            key = (state, symbol)
            if key in rules:
                self.warn(line_number, line, f"duplicate rule for state '{state}' and symbol '{symbol}' overrides earlier rule")
            rules[key] = TransitionRule(state, symbol, write, move, next_state)

        return TransitionTable(
            rules=tuple(rules.values()),
            initial_state=self.initial_state,
            blank_symbol=self.blank,
            initial_tape=tuple(self.input) or DEFAULT_TAPE,
            warnings=tuple(sorted(self.warnings, key=lambda w: w.line_number)),
        )


def parse(text):
    return RuleTableParser(text).parse()


def parse_file(path):
    with open(Path(path), "r", encoding="utf-8") as f:
        return parse(f.read())
