class TuringMachineError(Exception):
    """Base class for errors surfaced by the simulator."""


class ConfigurationError(TuringMachineError):
    """The parsed program cannot be executed at all."""


class EmptyTransitionTableError(ConfigurationError):
    def __init__(self):
        super().__init__("No valid transitions found in the state table")


class NoTransitionError(TuringMachineError):
    """Raised when no rule matches the current (state, symbol) pair."""

    def __init__(self, state, symbol):
        self.state = state
        self.symbol = symbol
        super().__init__(f"No transition defined for state '{state}' reading symbol '{symbol}'")
