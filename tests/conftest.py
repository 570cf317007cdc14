"""
Pytest configuration and shared fixtures for KeyRelay tests.
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

EXAMPLE_CODES = ["029A", "980A", "179A", "456A", "379A"]


@pytest.fixture(scope="session")
def numeric():
    """The standard door keypad."""
    from keyrelay.src.logic.keypad import numeric_keypad
    return numeric_keypad()


@pytest.fixture(scope="session")
def directional():
    """The standard robot control pad."""
    from keyrelay.src.logic.keypad import directional_keypad
    return directional_keypad()


@pytest.fixture(scope="session")
def example_codes():
    """Parsed codes from the worked example."""
    from keyrelay.src.logic.solve import parse_code
    return [parse_code(line) for line in EXAMPLE_CODES]
