from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

DEFAULT_INITIAL_STATE = "right"
DEFAULT_BLANK = "_"
DEFAULT_TAPE = ("1", "0", "1", "1")


class Move(str, Enum):
    LEFT = "L"
    RIGHT = "R"
    NONE = "N"


@dataclass(frozen=True)
class TransitionRule:
    """One (state, read) -> (write, move, next state) entry.

    read_symbol is normally a single symbol; a tuple or frozenset of symbols
    matches any of its members. write_symbol None leaves the cell untouched.
    """
    from_state: str
    read_symbol: Union[str, Tuple[str, ...], frozenset]
    write_symbol: Optional[str]
    move: Move
    to_state: str

    def reads(self, symbol: str) -> bool:
        if isinstance(self.read_symbol, str):
            return self.read_symbol == symbol
        return symbol in self.read_symbol

    def matches(self, state: str, symbol: str) -> bool:
        return self.from_state == state and self.reads(symbol)

    def read_label(self) -> str:
        if isinstance(self.read_symbol, str):
            return self.read_symbol
        return "[" + ",".join(sorted(self.read_symbol)) + "]"

    def label(self) -> str:
        written = self.read_label() if self.write_symbol is None else self.write_symbol
        return f"{self.read_label()}→{written},{self.move.value}"


@dataclass(frozen=True)
class ParseWarning:
    line_number: int
    line: str
    reason: str

    def __str__(self):
        return f"line {self.line_number}: {self.reason}: {self.line!r}"


@dataclass(frozen=True)
class TransitionTable:
    rules: Tuple[TransitionRule, ...] = ()
    initial_state: str = DEFAULT_INITIAL_STATE
    blank_symbol: str = DEFAULT_BLANK
    initial_tape: Tuple[str, ...] = DEFAULT_TAPE
    warnings: Tuple[ParseWarning, ...] = field(default=(), compare=False)

    def __len__(self):
        return len(self.rules)

    def lookup(self, state: str, symbol: str) -> Optional[TransitionRule]:
        """Return the rule for (state, symbol), exact symbols before symbol sets."""
        fallback = None
        for rule in self.rules:
            if rule.from_state != state:
                continue
            if isinstance(rule.read_symbol, str):
                if rule.read_symbol == symbol:
                    return rule
            elif fallback is None and symbol in rule.read_symbol:
                fallback = rule
        return fallback

    def states(self):
        """All states named by any rule, in first-encountered order."""
        seen = {}
        for rule in self.rules:
            seen.setdefault(rule.from_state, None)
            seen.setdefault(rule.to_state, None)
        return list(seen)

    def symbols(self):
        seen = {}
        for rule in self.rules:
            if isinstance(rule.read_symbol, str):
                seen.setdefault(rule.read_symbol, None)
            else:
                for symbol in sorted(rule.read_symbol):
                    seen.setdefault(symbol, None)
        return list(seen)

    def rules_from(self, state: str):
        return [rule for rule in self.rules if rule.from_state == state]
