"""Indicator lights: fewest presses that toggle the diagram into place.

Each press toggles the lights in the button's mask, so pressing a button twice
cancels out and only the set of buttons pressed an odd number of times
matters. The answer is the smallest subset of buttons whose masks XOR to the
diagram.
"""

from __future__ import annotations

from itertools import combinations
from typing import Collection, Sequence

from .errors import InvalidInput, NoSolution
from .matrix import mask_bits


def diagram_bits(lights: str) -> int:
    """Bitmask with bit ``i`` set when light ``i`` must be on (``#``)."""
    bits = 0
    for i, c in enumerate(lights):
        if c == "#":
            bits |= 1 << i
        elif c != ".":
            raise InvalidInput(f"Unexpected character {c!r} in indicator diagram")
    return bits


def min_toggle_presses(lights: str, masks: Sequence[Collection[int]]) -> int:
    """Fewest button presses that turn on exactly the ``#`` lights, starting from all off."""
    for index, mask in enumerate(masks):
        for row in mask:
            if row < 0 or row >= len(lights):
                raise InvalidInput(f"Mask {index} references light {row} outside [0, {len(lights)})")

    target = diagram_bits(lights)
    if target == 0:
        return 0
    buttons = sorted({mask_bits(mask) for mask in masks} - {0})
    for size in range(1, len(buttons) + 1):
        for chosen in combinations(buttons, size):
            state = 0
            for button in chosen:
                state ^= button
            if state == target:
                return size
    raise NoSolution(f"No combination of buttons lights {lights!r}")
