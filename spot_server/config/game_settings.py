"""
Game Configuration Constants Module

This module defines the symbol catalog and the default game constants.
All game parameters are centralized here to enable easy modification
"""

import string
from typing import Final, Tuple

# Core Game Configuration Constants
HAND_SIZE: Final[int] = 6
"""
Number of symbols on every hand and on the central set.
Type: Final[int] - Immutable to prevent accidental modification
"""

TURNS_TO_WIN: Final[int] = 2
"""
Correct moves a player needs before the match ends in their favour.
"""

LOCKOUT_DURATION_MS: Final[int] = 2000
"""
How long (milliseconds) a player is locked out after a wrong guess.
"""

MIN_PLAYERS_TO_PLAY: Final[int] = 1

# Symbol catalog: one upper-case letter per symbol
SYMBOL_CATALOG: Final[Tuple[str, ...]] = tuple(string.ascii_uppercase)


def all_symbols() -> Tuple[str, ...]:
    """Return the full, stable symbol catalog."""
    return SYMBOL_CATALOG


def validate_symbol_catalog_integrity(hand_size: int = HAND_SIZE) -> bool:
    """
    Validates the symbol catalog against a hand size.

    This function performs validation to ensure:
    1. The catalog is not empty
    2. Every symbol is a non-empty string
    3. Uniqueness validation: No duplicate entries
    4. Size validation: at least two full hands worth of symbols, so a
       hand can share exactly one symbol with the central set

    Returns:
        bool: True if the catalog passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not SYMBOL_CATALOG:
        raise ValueError("Symbol catalog cannot be empty")

    for index, symbol in enumerate(SYMBOL_CATALOG):
        if not isinstance(symbol, str) or not symbol:
            raise ValueError(f"Symbol at index {index} '{symbol}' is not a non-empty string")

    if len(SYMBOL_CATALOG) != len(set(SYMBOL_CATALOG)):
        duplicates = sorted({s for s in SYMBOL_CATALOG if SYMBOL_CATALOG.count(s) > 1})
        raise ValueError(f"Duplicate symbols found in catalog: {duplicates}")

    if hand_size <= 0:
        raise ValueError(f"Hand size must be positive, got {hand_size}")

    if len(SYMBOL_CATALOG) < 2 * hand_size:
        raise ValueError(
            f"Symbol catalog has {len(SYMBOL_CATALOG)} symbols, "
            f"needs at least {2 * hand_size} for hand size {hand_size}"
        )

    return True


if __name__ == "__main__":

    try:
        validate_symbol_catalog_integrity()
        print(f" Symbol catalog validation passed ({len(SYMBOL_CATALOG)} symbols)")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
