"""Core dice rolling engine.

Rolls a ComplexDiceRoll against an injected random source, then applies
its modifiers strictly in notation order:

- Explode (e): draw extra dice for results at or above a threshold
- Remove (r): drop the lowest N dice
- Keep (k): keep the highest N dice
- Keep lower (l): keep the lowest N dice

Outcomes are tuples sorted ascending. When Remove drops every die the
outcome becomes None, and any later modifiers leave it that way. A roll
that ends with zero dice for any other reason (0d6, k0) is None too.
"""

import logging
import random
from typing import Protocol

from dicegen.config import Settings, get_settings
from dicegen.dice.errors import DiceParseError, InvalidRollError
from dicegen.dice.parser import parse_dice_roll
from dicegen.dice.types import (
    ComplexDiceRoll,
    DiceRoll,
    RollModifierType,
    RollOutcome,
    RollSummary,
)

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything that yields uniform integers in a closed range.

    ``random.Random`` and ``random.SystemRandom`` both satisfy this.
    """

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        ...


def validate_roll(roll: ComplexDiceRoll, settings: Settings | None = None) -> None:
    """Reject roll parameters that cannot be evaluated.

    Raises:
        InvalidRollError: If the die has no faces, the roll exceeds the
            configured limits, or an explode threshold is 1 or less (every
            die would explode forever).
    """
    settings = settings or get_settings()
    dice_roll = roll.dice_roll

    if dice_roll.dice_range < 1:
        raise InvalidRollError(f"Die must have at least 1 side, got {dice_roll}")
    if dice_roll.number_of_dice > settings.max_dice:
        raise InvalidRollError(
            f"Too many dice: {dice_roll.number_of_dice} (max {settings.max_dice})"
        )
    if dice_roll.dice_range > settings.max_sides:
        raise InvalidRollError(
            f"Too many sides: {dice_roll.dice_range} (max {settings.max_sides})"
        )

    for modifier in roll.modifiers:
        if modifier.modifier_type == RollModifierType.EXPLODE and modifier.value <= 1:
            raise InvalidRollError(
                f"Explode threshold must be greater than 1, got {modifier}"
            )


def roll_dice(dice_roll: DiceRoll, rng: RandomSource) -> tuple[int, ...]:
    """Draw ``number_of_dice`` values in [1, dice_range], sorted ascending.

    Examples:
        >>> roll_dice(DiceRoll(number_of_dice=5, dice_range=1), random.Random())
        (1, 1, 1, 1, 1)
    """
    return tuple(
        sorted(
            rng.randint(1, dice_roll.dice_range)
            for _ in range(dice_roll.number_of_dice)
        )
    )


def explode(
    outcome: tuple[int, ...],
    threshold: int,
    dice_range: int,
    rng: RandomSource,
) -> tuple[int, ...]:
    """Add extra dice for every result at or above ``threshold``.

    Each qualifying die starts a chain of re-rolls that ends the first time
    a value below the threshold comes up. Every drawn value is kept,
    including ones that qualify again; those extend the pending chain
    rather than starting a new one.

    Raises:
        InvalidRollError: If ``threshold`` is 1 or less.
    """
    if threshold <= 1:
        raise InvalidRollError(f"Explode threshold must be greater than 1, got {threshold}")

    pending = sum(1 for value in outcome if value >= threshold)
    extra = []
    while pending > 0:
        value = rng.randint(1, dice_range)
        extra.append(value)
        if value < threshold:
            pending -= 1

    if extra:
        logger.debug(f"Exploded on {threshold}+: added {len(extra)} dice")
    return tuple(sorted(outcome + tuple(extra)))


def remove(outcome: tuple[int, ...], count: int) -> RollOutcome:
    """Drop the lowest ``count`` dice; None if that leaves nothing."""
    if count >= len(outcome):
        return None
    return outcome[count:]


def keep(outcome: tuple[int, ...], count: int) -> tuple[int, ...]:
    """Keep the highest ``count`` dice; unchanged if there are not more."""
    if count < len(outcome):
        return outcome[len(outcome) - count:]
    return outcome


def keep_lower(outcome: tuple[int, ...], count: int) -> tuple[int, ...]:
    """Keep the lowest ``count`` dice; unchanged if there are not more."""
    if count < len(outcome):
        return outcome[:count]
    return outcome


def evaluate(
    roll: ComplexDiceRoll,
    rng: RandomSource,
    settings: Settings | None = None,
) -> RollOutcome:
    """Roll the dice term and apply each modifier in order.

    Args:
        roll: Parsed roll to evaluate.
        rng: Source of randomness; only the base roll and Explode draw from it.
        settings: Limits to validate against (defaults to global settings).

    Returns:
        Sorted tuple of kept dice, or None if no dice remain.

    Raises:
        InvalidRollError: If the roll fails validation. Nothing is drawn.

    Examples:
        >>> evaluate(parse_dice_roll("17d1 k11 r6").roll, random.Random())
        (1, 1, 1, 1, 1)
    """
    try:
        validate_roll(roll, settings)
    except InvalidRollError as e:
        logger.warning(f"Rejected roll '{roll}': {e}")
        raise

    # Zero dice, whether from 0dN or k0, is always reported as None
    outcome: RollOutcome = roll_dice(roll.dice_roll, rng) or None
    logger.debug(f"Rolled {roll.dice_roll}: {outcome}")

    for modifier in roll.modifiers:
        if outcome is None:
            break

        match modifier.modifier_type:
            case RollModifierType.EXPLODE:
                outcome = explode(outcome, modifier.value, roll.dice_roll.dice_range, rng)
            case RollModifierType.REMOVE:
                outcome = remove(outcome, modifier.value)
            case RollModifierType.KEEP:
                outcome = keep(outcome, modifier.value)
            case RollModifierType.KEEP_LOWER:
                outcome = keep_lower(outcome, modifier.value)
            case _:
                raise AssertionError(f"Unhandled roll modifier: {modifier.modifier_type!r}")

        outcome = outcome or None
        logger.debug(f"After {modifier}: {outcome}")

    return outcome


def roll(notation: str, rng: RandomSource | None = None) -> RollOutcome:
    """Parse dice notation and evaluate it.

    Convenience function combining parse_dice_roll and evaluate. Unlike
    parse_dice_roll, leftover non-whitespace input is an error here.

    Args:
        notation: Dice notation string (e.g., "4d6 k3").
        rng: Random source; a fresh ``random.Random`` when omitted.

    Raises:
        DiceParseError: If notation is invalid or has trailing text.
        InvalidRollError: If the roll parameters cannot be evaluated.
    """
    parsed = parse_dice_roll(notation)
    if parsed.remainder.strip():
        raise DiceParseError(
            f"Unexpected text after roll: '{parsed.remainder.strip()}'",
            notation,
            len(notation) - len(parsed.remainder),
        )
    return evaluate(parsed.roll, rng if rng is not None else random.Random())


def summarize(
    outcome: RollOutcome,
    success_at: int | None = None,
    failure_at: int | None = None,
) -> RollSummary:
    """Total a finished roll and count successes and failures.

    Args:
        outcome: Result of ``evaluate``.
        success_at: Dice at or above this count as successes.
        failure_at: Dice at or below this count as failures.

    Examples:
        >>> summarize((1, 3, 5, 6), success_at=5, failure_at=1)
        RollSummary(kept_rolls=(1, 3, 5, 6), total=15, successes=2, failures=1)
    """
    kept = outcome or ()
    return RollSummary(
        kept_rolls=kept,
        total=sum(kept),
        successes=0 if success_at is None else sum(1 for v in kept if v >= success_at),
        failures=0 if failure_at is None else sum(1 for v in kept if v <= failure_at),
    )
