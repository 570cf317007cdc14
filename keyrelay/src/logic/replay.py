"""
Literal press strings for shallow chains.

expand_presses rebuilds one optimal human press string from the resolver's
counts; simulate_presses plays a human press string through the chain and
returns what the door keypad receives. Both materialize every press, so they
are meant for inspection and verification on small chains only.
"""

from typing import List, Optional, Sequence, Tuple

from keyrelay.src.logic.keypad_types import ACTIVATE, Key
from keyrelay.src.logic.chain import KeypadChain
from keyrelay.src.logic.resolver import PressCache, sequence_presses, solve_sequence

DEFAULT_MAX_EXPAND_LENGTH = 100_000


def expand_presses(
    chain: KeypadChain,
    keys: Sequence[Key],
    cache: Optional[PressCache] = None,
    max_length: int = DEFAULT_MAX_EXPAND_LENGTH
) -> Tuple[Key, ...]:
    """
    One optimal sequence of human presses that types keys at level 0.

    At every level the tie with the lowest resolved cost is chosen, so the
    result always has solve_sequence(chain, keys) presses.

    Raises:
        ValueError: if the press string would exceed max_length
    """
    if cache is None:
        cache = PressCache(chain)

    total = solve_sequence(chain, keys, cache)
    if total > max_length:
        raise ValueError(
            f"Press string of length {total} exceeds max_length={max_length}; "
            f"use solve_sequence for deep chains"
        )

    current: List[Key] = list(keys)
    for level in range(chain.last_level):
        topology = chain[level]
        next_keys: List[Key] = []
        prev = ACTIVATE
        for key in current:
            routes = topology.routes_between(prev, key)
            best = min(
                routes,
                key=lambda r: sequence_presses(chain, level + 1, r, cache)
            )
            next_keys.extend(best)
            prev = key
        current = next_keys

    return tuple(current)


def simulate_presses(chain: KeypadChain, presses: Sequence[Key]) -> Tuple[Key, ...]:
    """
    Play human presses through the chain; returns the keys typed at level 0.

    Every robot pointer starts on its ACTIVATE key.

    Raises:
        TopologyError: if a pointer is driven off its keypad or into the gap
        KeyNotFoundError: if a press is not a key of the human keypad
    """
    last = chain.last_level
    pointers = [chain[level].coord_of(ACTIVATE) for level in range(last)]
    typed: List[Key] = []

    for press in presses:
        chain[last].coord_of(press)

        key = press
        level = last - 1
        while True:
            if level < 0:
                typed.append(key)
                break
            if key != ACTIVATE:
                pointers[level] = chain[level].step(pointers[level], key)
                break
            # ACTIVATE presses whatever the robot at this level points at
            key = chain[level].keys[pointers[level]]
            level -= 1

    return tuple(typed)
