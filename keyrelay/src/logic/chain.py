"""
Keypad chain: the ordered control chain from the door keypad out to the pad
the human touches.

Level 0 is the numeric keypad, levels 1..N are directional pads worked by
robots, the last level is the directional pad pressed by the human.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Tuple

from keyrelay.src.logic.keypad import KeypadTopology

logger = logging.getLogger("KeypadChain")


@dataclass(frozen=True, eq=False)
class KeypadChain:
    """Read-only sequence of keypad topologies."""
    levels: Tuple[KeypadTopology, ...]

    def __post_init__(self):
        if not self.levels:
            raise ValueError("A keypad chain needs at least one keypad")

    @property
    def last_level(self) -> int:
        """Index of the human operated keypad."""
        return len(self.levels) - 1

    @property
    def intermediate_count(self) -> int:
        """Robot operated directional pads between the door and the human."""
        return max(0, len(self.levels) - 2)

    def __len__(self) -> int:
        return len(self.levels)

    def __getitem__(self, level: int) -> KeypadTopology:
        return self.levels[level]

    def __iter__(self) -> Iterator[KeypadTopology]:
        return iter(self.levels)


def assemble_chain(
    numeric: KeypadTopology,
    directional: KeypadTopology,
    intermediate_count: int
) -> KeypadChain:
    """
    Build [numeric, directional x (intermediate_count + 1)].

    Args:
        numeric: Target keypad typed by the innermost robot
        directional: Pad used at every indirection level
        intermediate_count: Robots between the door robot and the human

    Returns:
        KeypadChain of length intermediate_count + 2
    """
    if intermediate_count < 0:
        raise ValueError(f"intermediate_count must be >= 0, got {intermediate_count}")

    levels = (numeric,) + (directional,) * (intermediate_count + 1)
    logger.debug("Assembled chain of %d keypads (%d intermediate robots)", len(levels), intermediate_count)
    return KeypadChain(levels)
