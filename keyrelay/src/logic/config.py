"""
Solver configuration for KeyRelay.

Centralized configuration dataclass with named presets.
"""
from dataclasses import dataclass, replace
from typing import Optional

from keyrelay.src.logic.replay import DEFAULT_MAX_EXPAND_LENGTH


@dataclass(frozen=True)
class SolverConfig:
    """Base solver configuration."""

    # Chain shape: robots between the door robot and the human
    intermediate_robots: int = 2

    # Logging
    log_dir: Optional[str] = None
    verbose: bool = False

    # Literal press strings (shallow chains only)
    show_presses: bool = False
    max_expand_length: int = DEFAULT_MAX_EXPAND_LENGTH

    def __post_init__(self):
        if self.intermediate_robots < 0:
            raise ValueError(f"intermediate_robots must be >= 0, got {self.intermediate_robots}")
        if self.max_expand_length <= 0:
            raise ValueError(f"max_expand_length must be positive, got {self.max_expand_length}")

    def with_overrides(self, **kwargs) -> 'SolverConfig':
        """Copy with the non-None keyword values applied."""
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


# Pre-defined configurations
CONFIGS = {
    # Two robot-worked directional pads between the door robot and the human
    'part1': SolverConfig(intermediate_robots=2),

    # Twenty-five intermediate robots; only the count based resolver copes
    'part2': SolverConfig(intermediate_robots=25),
}


def get_config(name: str) -> SolverConfig:
    """Get a pre-defined configuration by name."""
    if name not in CONFIGS:
        raise ValueError(f"Unknown config: {name}. Available: {list(CONFIGS.keys())}")
    return CONFIGS[name]
