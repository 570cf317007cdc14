"""
Press-count resolver for KeyRelay.

Computes the fewest presses the human must make to drive a keypad chain from
one key to another at a given level. Each level's tied routes are costed by
typing them on the next level out, recursively, and only counts are kept:
expanding the literal press strings grows exponentially with chain depth,
while the memoized counts are bounded by levels x keys^2.

The cache key is (level, from_key, to_key). The level decides the
remaining recursion depth, so a cache is only valid for the chain it was made
for.
"""

import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

from keyrelay.src.logic.keypad_types import ACTIVATE, Key
from keyrelay.src.logic.chain import KeypadChain

logger = logging.getLogger("Resolver")

CacheKey = Tuple[int, Key, Key]


class PressCache:
    """
    Memo of minimal press counts for one keypad chain.

    Entries are written once and never revised. Hits are counted per entry
    so the cache can be dumped for inspection.
    """

    def __init__(self, chain: KeypadChain):
        self.chain = chain
        self.map: Dict[CacheKey, int] = {}
        self.lookup_count: Dict[CacheKey, int] = {}

    def lookup(self, level: int, from_key: Key, to_key: Key) -> Optional[int]:
        key = (level, from_key, to_key)
        result = self.map.get(key)
        if result is not None:
            self.lookup_count[key] = self.lookup_count.get(key, 0) + 1
        return result

    def add(self, level: int, from_key: Key, to_key: Key, count: int):
        key = (level, from_key, to_key)
        existing = self.map.setdefault(key, count)
        if existing != count:
            raise RuntimeError(
                f"Cache entry {level}:{from_key}->{to_key} already holds {existing}, refusing {count}"
            )

    def __len__(self) -> int:
        return len(self.map)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self.map

    @property
    def total_hits(self) -> int:
        return sum(self.lookup_count.values())

    def dump(self, log: logging.Logger = logger, level: int = logging.DEBUG):
        """Log every entry with its press count and hit count, sorted."""
        keys = sorted(
            self.map,
            key=lambda k: (k[0], k[1].sort_key(), k[2].sort_key())
        )
        log.log(level, "key cache (%d entries, %d hits):", len(keys), self.total_hits)
        for pad, key_from, key_to in keys:
            log.log(
                level,
                "  pad %d from %s to %s : presses %d, lookups %d",
                pad, key_from, key_to,
                self.map[(pad, key_from, key_to)],
                self.lookup_count.get((pad, key_from, key_to), 0)
            )


def _check_cache(chain: KeypadChain, cache: PressCache):
    if cache.chain is not chain:
        raise ValueError("Press cache belongs to a different keypad chain")


def resolve_presses(
    chain: KeypadChain,
    level: int,
    from_key: Key,
    to_key: Key,
    cache: PressCache
) -> int:
    """
    Minimal human presses to move level's pointer from from_key to to_key and press it.

    Args:
        chain: Keypad chain
        level: Chain level whose pointer moves (0 = numeric keypad)
        from_key: Key the pointer rests on
        to_key: Key to press
        cache: PressCache bound to chain

    Returns:
        Number of presses on the human operated keypad

    Raises:
        KeyNotFoundError: if either key is not on the level's keypad
    """
    _check_cache(chain, cache)
    if not 0 <= level <= chain.last_level:
        raise ValueError(f"Level {level} outside chain of {len(chain)} keypads")
    return _resolve(chain, level, from_key, to_key, cache)


def _resolve(chain: KeypadChain, level: int, from_key: Key, to_key: Key, cache: PressCache) -> int:
    topology = chain[level]

    if level == chain.last_level:
        # The human presses the key directly
        topology.coord_of(from_key)
        topology.coord_of(to_key)
        return 1

    if level + 1 == chain.last_level:
        # The human types the route; every tie costs its own length
        return topology.shortest_route_length(from_key, to_key)

    cached = cache.lookup(level, from_key, to_key)
    if cached is not None:
        return cached

    best = None
    for route in topology.routes_between(from_key, to_key):
        presses = _sequence(chain, level + 1, route, cache)
        if best is None or presses < best:
            best = presses

    cache.add(level, from_key, to_key, best)
    return best


def _sequence(chain: KeypadChain, level: int, keys: Iterable[Key], cache: PressCache) -> int:
    # Every robot rests on ACTIVATE before a sequence
    total = 0
    prev = ACTIVATE
    for key in keys:
        total += _resolve(chain, level, prev, key, cache)
        prev = key
    return total


def sequence_presses(
    chain: KeypadChain,
    level: int,
    keys: Iterable[Key],
    cache: PressCache
) -> int:
    """Presses to type keys at level, starting from that robot's ACTIVATE key."""
    _check_cache(chain, cache)
    if not 0 <= level <= chain.last_level:
        raise ValueError(f"Level {level} outside chain of {len(chain)} keypads")
    return _sequence(chain, level, keys, cache)


def solve_sequence(
    chain: KeypadChain,
    keys: Sequence[Key],
    cache: Optional[PressCache] = None
) -> int:
    """
    Minimal human presses to type keys on the chain's level 0 keypad.

    A fresh cache is used when none is supplied; pass one in to reuse results
    across several sequences on the same chain.
    """
    if cache is None:
        cache = PressCache(chain)
    _check_cache(chain, cache)
    return _sequence(chain, 0, keys, cache)
