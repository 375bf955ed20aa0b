from simulator.transition_table import TransitionTable

SPECIAL_CHARACTERS = set("[]{}:,#'\"")


def quote_symbol(symbol):
    if symbol and not (SPECIAL_CHARACTERS & set(symbol)) and not symbol.isspace():
        return symbol
    quote = "'" if "'" not in symbol else '"'
    return f"{quote}{symbol}{quote}"


def quote_value(value):
    quote = '"' if '"' not in value else "'"
    return f"{quote}{value}{quote}"


def format_rule(rule):
    if isinstance(rule.read_symbol, str):
        left = quote_symbol(rule.read_symbol)
        unchanged = rule.write_symbol == rule.read_symbol
    else:
        left = "[" + ", ".join(quote_symbol(s) for s in sorted(rule.read_symbol)) + "]"
        unchanged = False

    options = []
    if rule.write_symbol is not None and not unchanged:
        options.append(f"write: {quote_symbol(rule.write_symbol)}")
    options.append(f"{rule.move.value}: {rule.to_state}")
    return f"{left}: {{{', '.join(options)}}}"


def to_source(table: TransitionTable) -> str:
    """Render a table back into text that parse() reads as an equivalent table.

    The start state line is not quoted and parse() only reads a leading word
    there, so an initial state such as "q-1" comes back as "q".
    """
    lines = [
        f"input: {quote_value(''.join(table.initial_tape))}",
        f"blank: {quote_value(table.blank_symbol)}",
        f"start state: {table.initial_state}",
        "table:",
    ]

    by_state = {}
    for rule in table.rules:
        by_state.setdefault(rule.from_state, []).append(rule)

    for state, rules in by_state.items():
        lines.append(f"  {state}:")
        for rule in rules:
            lines.append(f"    {format_rule(rule)}")
    return "\n".join(lines) + "\n"
