"""Random pin sampling shared by every structure generator.

All randomness flows through an explicit ``np.random.Generator`` so that a
whole scenario is reproducible from one seed.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from field_gen.pieces import PIN_COLORS, Column, Pin, PinColor

# Probability that a pin matching the preferred bottom color is kept
# anyway when it shows up above the bottom of the column.
DUPLICATE_ESCAPE_PROB = 0.2


class Level(Enum):
    """Difficulty tier. Higher tiers build taller, busier structures."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def random_color(rng: np.random.Generator) -> PinColor:
    return PIN_COLORS[int(rng.integers(len(PIN_COLORS)))]


def random_pin(rng: np.random.Generator) -> Pin:
    return Pin(random_color(rng))


def sample_count(rng: np.random.Generator, min_count: int, max_count: int) -> int:
    """Uniform integer in [min_count, max_count]."""
    return int(rng.integers(min_count, max_count + 1))


def sample_pins(rng: np.random.Generator, min_count: int, max_count: int) -> Column:
    """A column of uniformly random colors, length uniform in [min, max]."""
    count = sample_count(rng, min_count, max_count)
    return tuple(random_pin(rng) for _ in range(count))


def sample_pins_with_preferred_bottom(
    rng: np.random.Generator,
    min_count: int,
    max_count: int,
    preferred: PinColor,
    preferred_prob: float,
) -> Column:
    """A column biased toward *preferred* at the bottom and away from it above.

    The bottom pin is *preferred* with probability *preferred_prob*, otherwise
    uniformly random. Every pin above it is redrawn while it comes out as
    *preferred*, unless an escape draw (DUPLICATE_ESCAPE_PROB) lets it stay.
    The bottom pin is always drawn, so the column has at least one pin.
    """
    count = sample_count(rng, min_count, max_count)

    if rng.random() < preferred_prob:
        pins = [Pin(preferred)]
    else:
        pins = [random_pin(rng)]

    while len(pins) < count:
        pin = random_pin(rng)
        if pin.color != preferred or rng.random() < DUPLICATE_ESCAPE_PROB:
            pins.append(pin)

    return tuple(pins)


def maybe(rng: np.random.Generator, prob: float, draw) -> Column:
    """``draw()`` with probability *prob*, else an empty column."""
    return draw() if rng.random() < prob else ()
