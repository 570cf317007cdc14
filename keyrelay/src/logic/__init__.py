# Logic module for keypad chains and press counting
"""
Logic module for KeyRelay.

Submodules:
- keypad: Keypad topologies and their tied-route tables
- chain: Keypad chain assembly
- resolver: Memoized press-count recursion
- solve: Code parsing, scoring and batch solving
- replay: Literal press strings for shallow chains
"""

from .keypad_types import (
    Action,
    Key,
    ACTIVATE,
    TopologyError,
    KeyNotFoundError,
    InputParseError,
)
from .keypad import (
    KeypadTopology,
    build_topology,
    parse_layout,
    numeric_keypad,
    directional_keypad,
)
from .chain import KeypadChain, assemble_chain
from .resolver import PressCache, resolve_presses, solve_sequence
from .solve import CodeResult, parse_code, load_codes, solve_codes, total_complexity

__all__ = [
    'Action',
    'Key',
    'ACTIVATE',
    'TopologyError',
    'KeyNotFoundError',
    'InputParseError',
    'KeypadTopology',
    'build_topology',
    'parse_layout',
    'numeric_keypad',
    'directional_keypad',
    'KeypadChain',
    'assemble_chain',
    'PressCache',
    'resolve_presses',
    'solve_sequence',
    'CodeResult',
    'parse_code',
    'load_codes',
    'solve_codes',
    'total_complexity',
]
