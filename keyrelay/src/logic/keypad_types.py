from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union, Literal

# Primitive Types
Coord = Tuple[int, int]  # (x, y), y grows downwards
KeyKind = Literal['DIGIT', 'ACTION']


class Action(Enum):
    """Directional pad actions, valued by their display symbol."""
    UP = "^"
    DOWN = "v"
    LEFT = "<"
    RIGHT = ">"
    ACTIVATE = "A"


# Grid offset for each movement action
ACTION_DELTAS = {
    Action.UP: (0, -1),
    Action.DOWN: (0, 1),
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
}


@dataclass(frozen=True)
class Key:
    """A single keypad button: a digit or a directional action."""
    kind: KeyKind
    value: Union[int, Action]

    @classmethod
    def digit(cls, value: int) -> 'Key':
        if not 0 <= value <= 9:
            raise ValueError(f"Digit key out of range: {value}")
        return cls('DIGIT', value)

    @classmethod
    def action(cls, action: Action) -> 'Key':
        return cls('ACTION', action)

    @property
    def is_digit(self) -> bool:
        return self.kind == 'DIGIT'

    @property
    def symbol(self) -> str:
        if self.kind == 'DIGIT':
            return str(self.value)
        return self.value.value

    def sort_key(self) -> Tuple[int, str]:
        return (0 if self.kind == 'DIGIT' else 1, self.symbol)

    def __str__(self) -> str:
        return self.symbol


UP = Key.action(Action.UP)
DOWN = Key.action(Action.DOWN)
LEFT = Key.action(Action.LEFT)
RIGHT = Key.action(Action.RIGHT)
ACTIVATE = Key.action(Action.ACTIVATE)

# A route is a run of movement keys closed by ACTIVATE
Route = Tuple[Key, ...]


def key_from_symbol(symbol: str) -> Key:
    """Map a display character (digit, ^ v < > or A) to its Key."""
    if len(symbol) == 1 and symbol.isdigit():
        return Key.digit(int(symbol))
    for action in Action:
        if action.value == symbol:
            return Key.action(action)
    raise ValueError(f"Unknown key symbol: {symbol!r}")


def format_keys(keys) -> str:
    return "".join(key.symbol for key in keys)


class TopologyError(ValueError):
    """Malformed keypad layout (duplicate keys, bad gap, disconnected region)."""


class KeyNotFoundError(KeyError, ValueError):
    """A key pair with no recorded route on a keypad."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0]) if self.args else ""


class InputParseError(ValueError):
    """A code line containing something other than digits and 'A'."""
