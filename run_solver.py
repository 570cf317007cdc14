import sys
import argparse
import logging
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from keyrelay.src.logic.config import get_config, CONFIGS
from keyrelay.src.logic.keypad_types import InputParseError, format_keys
from keyrelay.src.logic.solve import load_codes, build_chain, solve_codes, total_complexity
from keyrelay.src.logic.replay import expand_presses
from keyrelay.src.logic.resolver import PressCache
from keyrelay.src.utils.logger import SolveLogger


def main():
    parser = argparse.ArgumentParser(description="KeyRelay keypad chain solver")
    parser.add_argument("input", type=str, help="File with one door code per line (e.g. 029A)")
    parser.add_argument("--config", type=str, default="part1", choices=list(CONFIGS.keys()))
    parser.add_argument("--robots", type=int, default=None, help="Override intermediate robot count")
    parser.add_argument("--log-dir", type=str, default=None, help="Write a CSV row per code here")
    parser.add_argument("--show-presses", action="store_true", help="Print one optimal press string per code")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    config = get_config(args.config).with_overrides(
        intermediate_robots=args.robots,
        log_dir=args.log_dir,
        show_presses=args.show_presses or None,
        verbose=args.verbose or None,
    )

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # 1. Load Codes
    try:
        codes = load_codes(args.input)
    except InputParseError as e:
        print(f"Invalid input: {e}")
        sys.exit(1)
    print(f"Loaded {len(codes)} codes from {args.input}")

    # 2. Build Chain
    chain = build_chain(config.intermediate_robots)
    cache = PressCache(chain)
    print(f"Chain: {len(chain)} keypads ({config.intermediate_robots} intermediate robots)")

    # 3. Solve
    start_time = time.time()
    results = solve_codes(codes, chain, cache, progress=True)
    duration = time.time() - start_time

    solve_logger = SolveLogger(config.log_dir) if config.log_dir else None

    for keys, result in zip(codes, results):
        print(f"  {result.code}: presses={result.presses} value={result.numeric_value} complexity={result.complexity}")
        if config.show_presses:
            try:
                presses = expand_presses(chain, keys, cache, max_length=config.max_expand_length)
                print(f"    {format_keys(presses)}")
            except ValueError as e:
                print(f"    (not shown: {e})")
        if solve_logger is not None:
            solve_logger.log(result, config.intermediate_robots)

    if config.verbose:
        cache.dump()

    print(f"\nTotal complexity: {total_complexity(results)}")
    print(f"Solved in {duration * 1000:.1f}ms ({len(cache)} cached transitions)")


if __name__ == "__main__":
    main()
