import logging
import pytest
from keyrelay.src.logic.keypad_types import Key, ACTIVATE, KeyNotFoundError
from keyrelay.src.logic.keypad import numeric_keypad, directional_keypad
from keyrelay.src.logic.chain import KeypadChain, assemble_chain
from keyrelay.src.logic.resolver import PressCache, resolve_presses, solve_sequence
from keyrelay.src.logic.solve import parse_code


def make_chain(robots):
    return assemble_chain(numeric_keypad(), directional_keypad(), robots)


@pytest.mark.parametrize("robots, expected", [(0, 12), (1, 28), (2, 68)])
def test_known_values_029A(robots, expected):
    chain = make_chain(robots)
    assert solve_sequence(chain, parse_code("029A")) == expected


@pytest.mark.parametrize("code, expected", [
    ("029A", 68),
    ("980A", 60),
    ("179A", 68),
    ("456A", 64),
    ("379A", 64),
])
def test_known_values_two_robots(code, expected):
    chain = make_chain(2)
    assert solve_sequence(chain, parse_code(code)) == expected


def test_numeric_plus_human_pad_is_route_lengths(numeric, example_codes):
    """With the human directly on the control pad, cost is the summed shortest routes."""
    chain = make_chain(0)
    for keys in example_codes:
        expected = 0
        prev = ACTIVATE
        for key in keys:
            expected += numeric.shortest_route_length(prev, key)
            prev = key
        assert solve_sequence(chain, keys) == expected


def test_lone_keypad_costs_one_press_per_key(numeric):
    chain = KeypadChain((numeric,))
    keys = parse_code("029A")
    assert solve_sequence(chain, keys) == 4


def test_empty_sequence():
    assert solve_sequence(make_chain(2), ()) == 0


def test_monotonic_in_robot_count(example_codes):
    for keys in example_codes:
        counts = [solve_sequence(make_chain(n), keys) for n in range(7)]
        assert counts == sorted(counts)
        assert counts[0] < counts[-1]


def test_deep_chain_is_tractable(example_codes):
    """25 robots resolve through counts alone; the cache stays small."""
    chain = make_chain(25)
    cache = PressCache(chain)

    totals = [solve_sequence(chain, keys, cache) for keys in example_codes]

    assert all(t > 10 ** 9 for t in totals)
    # At most keys^2 entries per level
    assert len(cache) <= 11 * 11 + 5 * 5 * (len(chain) - 1)


def test_determinism_independent_of_cache_history():
    chain = make_chain(3)
    a, b = Key.digit(3), Key.digit(7)

    fresh = resolve_presses(chain, 0, a, b, PressCache(chain))

    warmed = PressCache(chain)
    solve_sequence(chain, parse_code("980A"), warmed)
    solve_sequence(chain, parse_code("456A"), warmed)
    assert resolve_presses(chain, 0, a, b, warmed) == fresh
    assert resolve_presses(chain, 0, a, b, warmed) == fresh


def test_cache_transparency(example_codes):
    chain = make_chain(4)
    shared = PressCache(chain)

    with_shared = [solve_sequence(chain, keys, shared) for keys in example_codes]
    with_fresh = [solve_sequence(chain, keys, PressCache(chain)) for keys in example_codes]
    again = [solve_sequence(chain, keys, shared) for keys in example_codes]

    assert with_shared == with_fresh == again
    assert shared.total_hits > 0


def test_cache_is_bound_to_chain():
    chain_a = make_chain(2)
    chain_b = make_chain(2)

    with pytest.raises(ValueError, match="different"):
        solve_sequence(chain_a, parse_code("029A"), PressCache(chain_b))


def test_cache_checked_once_per_sequence(monkeypatch):
    """The chain binding is validated at the entry point, not on every recursion."""
    from keyrelay.src.logic import resolver

    calls = []
    original = resolver._check_cache

    def counting_check(chain, cache):
        calls.append(1)
        original(chain, cache)

    monkeypatch.setattr(resolver, "_check_cache", counting_check)

    chain = make_chain(25)
    assert solve_sequence(chain, parse_code("029A")) > 0
    assert len(calls) == 1

    resolve_presses(chain, 0, ACTIVATE, Key.digit(0), PressCache(chain))
    assert len(calls) == 2


def test_sequence_presses_validates_level():
    from keyrelay.src.logic.resolver import sequence_presses

    chain = make_chain(1)
    with pytest.raises(ValueError, match="outside"):
        sequence_presses(chain, 3, (ACTIVATE,), PressCache(chain))


def test_unknown_key_fails_fast():
    chain = make_chain(2)
    cache = PressCache(chain)

    # Digits do not exist on the directional levels
    with pytest.raises(KeyNotFoundError):
        resolve_presses(chain, 1, ACTIVATE, Key.digit(5), cache)
    with pytest.raises(KeyNotFoundError):
        resolve_presses(chain, chain.last_level, ACTIVATE, Key.digit(5), cache)


def test_level_out_of_range():
    chain = make_chain(1)
    with pytest.raises(ValueError, match="outside"):
        resolve_presses(chain, 5, ACTIVATE, ACTIVATE, PressCache(chain))


def test_cache_entries_never_revised():
    chain = make_chain(1)
    cache = PressCache(chain)

    cache.add(0, ACTIVATE, Key.digit(0), 8)
    cache.add(0, ACTIVATE, Key.digit(0), 8)
    assert cache.lookup(0, ACTIVATE, Key.digit(0)) == 8
    assert (0, ACTIVATE, Key.digit(0)) in cache

    with pytest.raises(RuntimeError):
        cache.add(0, ACTIVATE, Key.digit(0), 9)


def test_cache_dump(caplog):
    chain = make_chain(2)
    cache = PressCache(chain)
    solve_sequence(chain, parse_code("029A"), cache)

    with caplog.at_level(logging.DEBUG, logger="Resolver"):
        cache.dump()

    assert f"key cache ({len(cache)} entries" in caplog.text
    assert "pad 0 from A to 0" in caplog.text
