from dataclasses import dataclass, field
from typing import List

from logger.logger import JSONLogger
from simulator.errors import EmptyTransitionTableError, NoTransitionError
from simulator.parser import parse
from simulator.serializer import to_source
from simulator.transition_table import Move, TransitionTable

HALT_STATE = "done"


@dataclass
class TapeState:
    tape: List[str] = field(default_factory=list)
    head_position: int = 0
    current_state: str = ""
    step_count: int = 0
    halted: bool = False

    def read(self, blank):
        if 0 <= self.head_position < len(self.tape):
            return self.tape[self.head_position]
        return blank

    def tape_text(self):
        return "".join(self.tape)

    def snapshot(self):
        return {
            "tape": list(self.tape),
            "head_position": self.head_position,
            "current_state": self.current_state,
            "step_count": self.step_count,
            "halted": self.halted,
        }


def initialize(table: TransitionTable) -> TapeState:
    if len(table) == 0:
        raise EmptyTransitionTableError()
    tape = list(table.initial_tape) or [table.blank_symbol]
    return TapeState(tape=tape, current_state=table.initial_state)


def find_rule(state: TapeState, table: TransitionTable):
    symbol = state.read(table.blank_symbol)
    rule = table.lookup(state.current_state, symbol)
    if rule is None:
        raise NoTransitionError(state.current_state, symbol)
    return rule


def apply_rule(state: TapeState, rule, blank) -> TapeState:
    if rule.write_symbol is not None:
        state.tape[state.head_position] = rule.write_symbol

    state.current_state = rule.to_state

    if rule.move == Move.LEFT:
        state.head_position = max(0, state.head_position - 1)
    elif rule.move == Move.RIGHT:
        state.head_position += 1
        if state.head_position >= len(state.tape):
            state.tape.append(blank)
    state.step_count += 1

    if rule.move == Move.NONE or rule.to_state == HALT_STATE:
        state.halted = True
    return state


def step(state: TapeState, table: TransitionTable) -> TapeState:
    """Advance one transition in place.

    Raises NoTransitionError before touching the state when nothing matches.
    A halted state is returned unchanged.
    """
    if state.halted:
        return state
    rule = find_rule(state, table)
    return apply_rule(state, rule, table.blank_symbol)


class TuringMachine:
    def __init__(self, table: TransitionTable, logger=None):
        self.table = table
        self.logger = logger if logger is not None else JSONLogger(write_to_disk=False)
        self.state = None
        self.error = None
        self.reset()

    @classmethod
    def from_source(cls, text, logger=None):
        return cls(parse(text), logger=logger)

    @property
    def halted(self):
        return self.state.halted

    def reset(self):
        """Discard the tape and step log and start again from the table."""
        self.state = initialize(self.table)
        self.error = None
        self.logger.clear()
        self.logger.log({
            "event": "initialized",
            "transitions": len(self.table),
            "state": self.state.current_state,
            "tape": self.state.tape_text(),
        })

    def step(self):
        """Apply one transition. Returns False when the machine could not advance."""
        if self.state.halted:
            self.logger.log({"event": "already_halted"})
            return False

        blank = self.table.blank_symbol
        read = self.state.read(blank)
        try:
            rule = find_rule(self.state, self.table)
        except NoTransitionError as e:
            self.error = str(e)
            self.logger.log({"event": "error", "state": e.state, "symbol": e.symbol})
            return False

        previous_state = self.state.current_state
        apply_rule(self.state, rule, blank)
        self.logger.log({
            "event": "step",
            "step": self.state.step_count,
            "state": previous_state,
            "read": read,
            "next_state": rule.to_state,
            "write": rule.write_symbol,
            "move": rule.move.value,
            "head": self.state.head_position,
        })
        if self.state.halted:
            self.logger.log({"event": "halted", "state": self.state.current_state})
        return True

    def run(self, max_steps=10000, visualize=False):
        steps = 0
        while not self.state.halted and steps < max_steps:
            if visualize:
                self.visualize()
            if not self.step():
                break
            steps += 1
        if visualize:
            self.visualize()
        return steps

    def render_tape(self, window=9):
        """Return a window of cells around the head with a caret under it."""
        blank = self.table.blank_symbol
        start = max(0, self.state.head_position - window // 2)
        visible = self.state.tape[start:start + window]
        visible += [blank] * (window - len(visible))

        width = max(len(cell) for cell in visible)
        cells = " ".join(cell.ljust(width) for cell in visible)
        offset = (self.state.head_position - start) * (width + 1)
        caret = " " * offset + "^"
        return f"{cells}\n{caret}"

    def visualize(self, window=9):
        print(self.render_tape(window))
        print(f"State: {self.state.current_state}, Step: {self.state.step_count}, Halted: {self.state.halted}")

    def serialize(self):
        return to_source(self.table)
