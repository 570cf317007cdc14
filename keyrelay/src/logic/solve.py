"""
Batch solving of door codes.

Parses code lines, runs each through the press-count resolver on one shared
chain and cache, and scores it: complexity = presses * numeric value of the
code's digits.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from tqdm import tqdm

from keyrelay.src.logic.keypad_types import ACTIVATE, InputParseError, Key, format_keys
from keyrelay.src.logic.keypad import KeypadTopology, numeric_keypad, directional_keypad
from keyrelay.src.logic.chain import KeypadChain, assemble_chain
from keyrelay.src.logic.resolver import PressCache, solve_sequence

logger = logging.getLogger("Solve")

Code = Tuple[Key, ...]


@dataclass(frozen=True)
class CodeResult:
    """Outcome for a single door code."""
    code: str
    presses: int
    numeric_value: int

    @property
    def complexity(self) -> int:
        return self.presses * self.numeric_value


def parse_code(line: str) -> Code:
    """
    Turn a code line such as '029A' into keys.

    Raises:
        InputParseError: on an empty line or any character other than 0-9 and 'A'
    """
    text = line.strip()
    if not text:
        raise InputParseError("Empty code line")

    keys = []
    for pos, c in enumerate(text):
        if '0' <= c <= '9':
            keys.append(Key.digit(ord(c) - ord('0')))
        elif c == 'A':
            keys.append(ACTIVATE)
        else:
            raise InputParseError(f"Invalid character {c!r} at position {pos} in code {text!r}")
    return tuple(keys)


def load_codes(path: Union[str, Path]) -> List[Code]:
    """Read one code per non-blank line."""
    path = Path(path)
    codes = []
    with open(path, 'r', encoding='utf-8') as f:
        for line_no, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                codes.append(parse_code(line))
            except InputParseError as e:
                raise InputParseError(f"{path}:{line_no}: {e}") from None
    return codes


def code_value(keys: Sequence[Key]) -> int:
    """Digits of the code read in order as a decimal number ('029A' -> 29)."""
    value = 0
    for key in keys:
        if key.is_digit:
            value = value * 10 + key.value
    return value


def build_chain(
    intermediate_robots: int,
    numeric: Optional[KeypadTopology] = None,
    directional: Optional[KeypadTopology] = None
) -> KeypadChain:
    """Chain over the standard keypads unless others are given."""
    return assemble_chain(
        numeric if numeric is not None else numeric_keypad(),
        directional if directional is not None else directional_keypad(),
        intermediate_robots
    )


def solve_codes(
    codes: Sequence[Code],
    chain: KeypadChain,
    cache: Optional[PressCache] = None,
    progress: bool = False
) -> List[CodeResult]:
    """
    Fewest human presses for every code, sharing one cache across the batch.

    Args:
        codes: Parsed codes
        chain: Keypad chain to type through
        cache: Optional cache bound to chain (reused across calls if given)
        progress: Show a tqdm progress bar

    Returns:
        One CodeResult per code, in input order
    """
    if cache is None:
        cache = PressCache(chain)

    results = []
    for keys in tqdm(codes, desc="Codes", unit="code", leave=False, disable=not progress):
        presses = solve_sequence(chain, keys, cache)
        result = CodeResult(
            code=format_keys(keys),
            presses=presses,
            numeric_value=code_value(keys)
        )
        logger.debug("%s: %d presses, complexity %d", result.code, presses, result.complexity)
        results.append(result)

    logger.debug("Cache holds %d entries after %d codes (%d hits)", len(cache), len(codes), cache.total_hits)
    return results


def total_complexity(results: Sequence[CodeResult]) -> int:
    return sum(r.complexity for r in results)
