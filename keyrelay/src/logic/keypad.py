"""
Keypad topology for KeyRelay.

A topology is a small fixed grid of labeled keys with one gap. At build time
it precomputes, for every ordered key pair, every tied shortest route that
moves a pointer between the two keys and presses the destination.

Ties are kept: which of several equally short routes is cheapest only shows
up once the route is typed through further indirection levels.
"""

import logging
import numpy as np
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple

from keyrelay.src.logic.keypad_types import (
    ACTIVATE,
    ACTION_DELTAS,
    Coord,
    Key,
    KeyNotFoundError,
    Route,
    TopologyError,
    format_keys,
    key_from_symbol,
)
from keyrelay.src.logic.graph_ops import (
    grid_to_adjacency,
    count_components,
    all_pairs_hops,
    enumerate_shortest_paths,
)

logger = logging.getLogger("KeypadTopology")

GAP_SYMBOL = "_"

NUMERIC_ROWS = ("789", "456", "123", "_0A")
DIRECTIONAL_ROWS = ("_^A", "<v>")

# Movement key for each unit step (dx, dy)
_STEP_KEYS = {delta: Key.action(action) for action, delta in ACTION_DELTAS.items()}


@dataclass(frozen=True, eq=False)
class KeypadTopology:
    """
    Immutable keypad: key placement plus the route table.

    Attributes:
        name: Label used in logs
        width: Grid columns
        height: Grid rows
        keys: Coord -> Key for every occupied cell
        coords: Key -> Coord (inverse of keys)
        occupancy: Boolean grid (height, width), False at the gap
        routes: (from_key, to_key) -> tied minimal routes
    """
    name: str
    width: int
    height: int
    keys: Mapping[Coord, Key]
    coords: Mapping[Key, Coord]
    occupancy: np.ndarray
    routes: Mapping[Tuple[Key, Key], Tuple[Route, ...]]

    def routes_between(self, from_key: Key, to_key: Key) -> Tuple[Route, ...]:
        """All tied shortest routes from one key to another."""
        try:
            return self.routes[(from_key, to_key)]
        except KeyError:
            raise KeyNotFoundError(
                f"No route from {from_key} to {to_key} on keypad '{self.name}'"
            ) from None

    def shortest_route_length(self, from_key: Key, to_key: Key) -> int:
        return min(len(route) for route in self.routes_between(from_key, to_key))

    def coord_of(self, key: Key) -> Coord:
        try:
            return self.coords[key]
        except KeyError:
            raise KeyNotFoundError(f"Key {key} is not on keypad '{self.name}'") from None

    def step(self, coord: Coord, move: Key) -> Coord:
        """Move a pointer one cell. The gap and the grid edge are walls."""
        if move == ACTIVATE or move.is_digit:
            raise ValueError(f"Not a movement key: {move}")
        dx, dy = ACTION_DELTAS[move.value]
        nx, ny = coord[0] + dx, coord[1] + dy
        if not (0 <= nx < self.width and 0 <= ny < self.height):
            raise TopologyError(f"Pointer left keypad '{self.name}' at {(nx, ny)}")
        if (nx, ny) not in self.keys:
            raise TopologyError(f"Pointer entered the gap of keypad '{self.name}' at {(nx, ny)}")
        return (nx, ny)

    def simulate(self, from_key: Key, route: Sequence[Key]) -> Coord:
        """Walk a route from a key on the literal grid; returns where it ends."""
        pos = self.coord_of(from_key)
        for move in route:
            if move == ACTIVATE:
                continue
            pos = self.step(pos, move)
        return pos


def parse_layout(rows: Sequence[str]) -> Tuple[Dict[Coord, Key], int, int]:
    """
    Build a layout mapping from text rows.

    Each character is one cell: a digit, one of ^ v < > A, or '_' for the gap.

    Returns:
        (layout, width, height)
    """
    height = len(rows)
    width = max((len(row) for row in rows), default=0)
    layout: Dict[Coord, Key] = {}
    for y, row in enumerate(rows):
        if len(row) != width:
            raise TopologyError(f"Ragged layout row {y}: {row!r}")
        for x, symbol in enumerate(row):
            if symbol == GAP_SYMBOL:
                continue
            try:
                layout[(x, y)] = key_from_symbol(symbol)
            except ValueError as e:
                raise TopologyError(f"Bad layout cell {(x, y)}: {e}") from None
    return layout, width, height


def _validate_layout(layout: Mapping[Coord, Key], width: int, height: int, name: str):
    seen: Dict[Key, Coord] = {}
    for (x, y), key in layout.items():
        if not (0 <= x < width and 0 <= y < height):
            raise TopologyError(f"Key {key} at {(x, y)} lies outside {width}x{height} keypad '{name}'")
        if key in seen:
            raise TopologyError(f"Key {key} appears twice on keypad '{name}': {seen[key]} and {(x, y)}")
        seen[key] = (x, y)

    gaps = width * height - len(layout)
    if gaps != 1:
        raise TopologyError(f"Keypad '{name}' must have exactly one gap, found {gaps}")


def _path_to_route(path: List[Coord]) -> Route:
    moves = [
        _STEP_KEYS[(b[0] - a[0], b[1] - a[1])]
        for a, b in zip(path, path[1:])
    ]
    return tuple(moves) + (ACTIVATE,)


def build_topology(
    layout: Mapping[Coord, Key],
    width: int,
    height: int,
    name: str = "keypad"
) -> KeypadTopology:
    """
    Build a keypad and its full route table.

    Args:
        layout: Occupied coordinate -> Key
        width: Grid columns
        height: Grid rows
        name: Label for errors and logs

    Returns:
        KeypadTopology

    Raises:
        TopologyError: duplicate keys, out of bounds cells, not exactly one gap,
            or a layout that is not one connected region
    """
    _validate_layout(layout, width, height, name)

    occupancy = np.zeros((height, width), dtype=bool)
    for x, y in layout:
        occupancy[y, x] = True

    adj, nodes, node_to_idx = grid_to_adjacency(occupancy)
    n_components = count_components(adj)
    if n_components != 1:
        raise TopologyError(
            f"Keypad '{name}' is split into {n_components} regions around its gap"
        )

    hops = all_pairs_hops(adj)

    routes: Dict[Tuple[Key, Key], Tuple[Route, ...]] = {}
    for from_pos, from_key in layout.items():
        for to_pos, to_key in layout.items():
            if from_pos == to_pos:
                routes[(from_key, to_key)] = ((ACTIVATE,),)
                continue

            index_paths = enumerate_shortest_paths(
                adj, hops, node_to_idx[from_pos], node_to_idx[to_pos]
            )
            tied = sorted(
                (_path_to_route([nodes[i] for i in p]) for p in index_paths),
                key=format_keys
            )
            if not tied:
                raise TopologyError(f"No route from {from_key} to {to_key} on keypad '{name}'")
            routes[(from_key, to_key)] = tuple(tied)

    occupancy.setflags(write=False)

    logger.debug(
        "Built keypad '%s' (%dx%d): %d keys, %d routes",
        name, width, height, len(layout), sum(len(r) for r in routes.values())
    )

    return KeypadTopology(
        name=name,
        width=width,
        height=height,
        keys=MappingProxyType(dict(layout)),
        coords=MappingProxyType({key: pos for pos, key in layout.items()}),
        occupancy=occupancy,
        routes=MappingProxyType(routes),
    )


def topology_from_rows(rows: Sequence[str], name: str = "keypad") -> KeypadTopology:
    layout, width, height = parse_layout(rows)
    return build_topology(layout, width, height, name=name)


@lru_cache(maxsize=None)
def numeric_keypad() -> KeypadTopology:
    """The door keypad: 7 8 9 / 4 5 6 / 1 2 3 / _ 0 A."""
    return topology_from_rows(NUMERIC_ROWS, name="numeric")


@lru_cache(maxsize=None)
def directional_keypad() -> KeypadTopology:
    """The robot control pad: _ ^ A / < v >."""
    return topology_from_rows(DIRECTIONAL_ROWS, name="directional")
