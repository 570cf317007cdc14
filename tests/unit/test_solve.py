import pytest
from keyrelay.src.logic.keypad_types import Key, ACTIVATE, InputParseError
from keyrelay.src.logic.solve import (
    CodeResult,
    parse_code,
    load_codes,
    code_value,
    build_chain,
    solve_codes,
    total_complexity,
)
from keyrelay.src.logic.resolver import PressCache


class TestParsing:

    def test_parse_code(self):
        assert parse_code("029A") == (Key.digit(0), Key.digit(2), Key.digit(9), ACTIVATE)

    def test_parse_code_strips_whitespace(self):
        assert parse_code("  980A\n") == parse_code("980A")

    def test_parse_code_rejects_other_characters(self):
        with pytest.raises(InputParseError, match="'B'"):
            parse_code("02B9A")
        with pytest.raises(InputParseError):
            parse_code("^A")

    def test_parse_code_rejects_non_ascii_digits(self):
        """Only 0-9 count as digits; other Unicode digits are parse errors."""
        with pytest.raises(InputParseError, match="'²'"):
            parse_code("0²9A")
        with pytest.raises(InputParseError):
            parse_code("0٢9A")

    def test_parse_code_rejects_empty_line(self):
        with pytest.raises(InputParseError):
            parse_code("   ")

    def test_load_codes(self, tmp_path):
        path = tmp_path / "codes.txt"
        path.write_text("029A\n\n980A\n179A\n")

        codes = load_codes(path)

        assert len(codes) == 3
        assert codes[1] == parse_code("980A")

    def test_load_codes_reports_line(self, tmp_path):
        path = tmp_path / "codes.txt"
        path.write_text("029A\n98x0A\n")

        with pytest.raises(InputParseError, match=r"codes.txt:2"):
            load_codes(path)


class TestScoring:

    def test_code_value(self):
        assert code_value(parse_code("029A")) == 29
        assert code_value(parse_code("980A")) == 980
        assert code_value(parse_code("A")) == 0

    def test_complexity(self):
        result = CodeResult(code="029A", presses=68, numeric_value=29)
        assert result.complexity == 68 * 29

    def test_total_complexity_empty(self):
        assert total_complexity([]) == 0


class TestBatchSolve:

    def test_build_chain(self):
        chain = build_chain(2)
        assert len(chain) == 4
        assert chain.intermediate_count == 2

    def test_example_batch_two_robots(self, example_codes):
        results = solve_codes(example_codes, build_chain(2))

        assert [r.code for r in results] == ["029A", "980A", "179A", "456A", "379A"]
        assert [r.presses for r in results] == [68, 60, 68, 64, 64]
        assert total_complexity(results) == 126384

    def test_reused_cache_gives_same_results(self, example_codes):
        chain = build_chain(5)
        cache = PressCache(chain)

        first = solve_codes(example_codes, chain, cache)
        size = len(cache)
        second = solve_codes(example_codes, chain, cache)

        assert first == second
        assert len(cache) == size

    def test_progress_bar_does_not_change_results(self, example_codes):
        chain = build_chain(2)
        assert solve_codes(example_codes, chain, progress=True) == solve_codes(example_codes, chain)
