"""Circular layout of the state graph for the display layer."""

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from simulator.transition_table import Move, TransitionTable

RADIUS = 120.0
CENTER = (150.0, 150.0)
NODE_RADIUS = 30.0
CURVE_OFFSET_SCALE = 0.5
START_STATE_NAME = "q0"

Point = Tuple[float, float]


@dataclass(frozen=True)
class Node:
    name: str
    x: float
    y: float
    is_start: bool
    is_final: bool
    is_active: bool


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    label: str
    is_active: bool
    points: Tuple[Point, ...]

    @property
    def is_self_loop(self):
        return self.source == self.target

    def svg_path(self):
        if not self.points:
            return ""
        (sx, sy), *rest = self.points
        coords = ", ".join(f"{x:g} {y:g}" for x, y in rest)
        command = "C" if self.is_self_loop else "Q"
        return f"M {sx:g} {sy:g} {command} {coords}"


@dataclass(frozen=True)
class GraphModel:
    states: Tuple[str, ...]
    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    positions: Dict[str, Point]

    def to_dict(self):
        return {
            "states": list(self.states),
            "nodes": [
                {"name": n.name, "x": n.x, "y": n.y, "start": n.is_start,
                 "final": n.is_final, "active": n.is_active}
                for n in self.nodes
            ],
            "edges": [
                {"source": e.source, "target": e.target, "label": e.label,
                 "active": e.is_active, "path": e.svg_path()}
                for e in self.edges
            ],
        }


def circle_positions(states):
    n = len(states)
    if n == 0:
        return {}
    angles = 2 * np.pi * np.arange(n) / n
    xs = CENTER[0] + RADIUS * np.cos(angles)
    ys = CENTER[1] + RADIUS * np.sin(angles)
    return {state: (float(x), float(y)) for state, x, y in zip(states, xs, ys)}


def self_loop(position):
    x, y = position
    return ((x, y - 20), (x - 40, y - 60), (x + 40, y - 60), (x, y - 20))


def curved_edge(source, target):
    """Quadratic curve from rim to rim, bowed off the straight chord."""
    (x1, y1), (x2, y2) = source, target
    dx, dy = x2 - x1, y2 - y1
    distance = float(np.hypot(dx, dy))
    if distance == 0:
        return (source, source, target)

    start = (x1 + dx * NODE_RADIUS / distance, y1 + dy * NODE_RADIUS / distance)
    end = (x2 - dx * NODE_RADIUS / distance, y2 - dy * NODE_RADIUS / distance)

    offset = distance / 3
    mid_x, mid_y = (x1 + x2) / 2, (y1 + y2) / 2
    perp_x = -dy / distance * offset * CURVE_OFFSET_SCALE
    perp_y = dx / distance * offset * CURVE_OFFSET_SCALE
    return (start, (mid_x + perp_x, mid_y + perp_y), end)


def final_states(table: TransitionTable, states):
    """States with no outgoing rule that moves the head."""
    moving = {rule.from_state for rule in table.rules if rule.move != Move.NONE}
    return [state for state in states if state not in moving]


def layout(table: TransitionTable, current_state, start_state=START_STATE_NAME) -> GraphModel:
    states = table.states()
    positions = circle_positions(states)

    grouped = {}
    for rule in table.rules:
        grouped.setdefault((rule.from_state, rule.to_state), []).append(rule)

    edges = []
    for (source, target), rules in grouped.items():
        if source == target:
            points = self_loop(positions[source])
        else:
            points = curved_edge(positions[source], positions[target])
        edges.append(Edge(
            source=source,
            target=target,
            label=", ".join(rule.label() for rule in rules),
            is_active=source == current_state,
            points=points,
        ))

    finals = set(final_states(table, states))
    nodes = tuple(
        Node(
            name=state,
            x=positions[state][0],
            y=positions[state][1],
            is_start=state == start_state,
            is_final=state in finals,
            is_active=state == current_state,
        )
        for state in states
    )
    return GraphModel(states=tuple(states), nodes=nodes, edges=tuple(edges), positions=positions)
