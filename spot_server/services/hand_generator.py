"""
Hand Generator

Deals the central set and the player hands. Every freshly dealt hand shares
exactly one symbol with the central set it was dealt against.
"""

import random
from typing import Iterable, List, Optional, Sequence

from ..config.game_settings import all_symbols


def draw_central_set(hand_size: int, rng: Optional[random.Random] = None) -> List[str]:
    """
    Draws a new central set.

    Args:
        hand_size: Number of distinct symbols to draw
        rng: Optional random source, defaults to the module-level generator

    Returns:
        List of `hand_size` distinct symbols in random order

    Raises:
        ValueError: If the catalog cannot supply that many symbols
    """
    rng = rng or random
    catalog = all_symbols()

    if hand_size <= 0:
        raise ValueError(f"Hand size must be positive, got {hand_size}")
    if hand_size > len(catalog):
        raise ValueError(f"Cannot draw {hand_size} symbols from a catalog of {len(catalog)}")

    return rng.sample(catalog, hand_size)


def draw_player_hand(central_set: Sequence[str], hand_size: int,
                     rng: Optional[random.Random] = None) -> List[str]:
    """
    Deals a hand against a central set.

    One symbol of the central set, picked at random, is forced into the hand.
    The rest are filled from the catalog in random order, skipping symbols
    already in the hand and symbols of the central set. The hand is then
    shuffled so the position of the shared symbol tells nothing.

    Args:
        central_set: Symbols currently in play
        hand_size: Number of symbols in the hand
        rng: Optional random source, defaults to the module-level generator

    Returns:
        List of `hand_size` distinct symbols sharing exactly one symbol
        with `central_set`

    Raises:
        ValueError: If the central set is empty or the catalog is too small
    """
    rng = rng or random
    catalog = all_symbols()

    if hand_size <= 0:
        raise ValueError(f"Hand size must be positive, got {hand_size}")
    if not central_set:
        raise ValueError("Central set cannot be empty")

    in_play = set(central_set)
    fillers_available = len([symbol for symbol in catalog if symbol not in in_play])
    if fillers_available < hand_size - 1:
        raise ValueError(
            f"Catalog has only {fillers_available} symbols outside the central set, "
            f"needs {hand_size - 1}"
        )

    shared = rng.choice(list(central_set))
    hand = [shared]

    for symbol in rng.sample(catalog, len(catalog)):
        if len(hand) >= hand_size:
            break
        if symbol in hand or symbol in in_play:
            continue
        hand.append(symbol)

    rng.shuffle(hand)
    return hand


def shares_symbol(hand: Iterable[str], central_set: Iterable[str]) -> bool:
    """True if the hand has at least one symbol of the central set."""
    return not set(hand).isdisjoint(central_set)
