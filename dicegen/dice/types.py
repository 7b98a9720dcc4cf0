"""Dice system type definitions.

Immutable dataclasses for dice terms, modifiers, roll outcomes and the
operands of a scalar calculation.
"""

from dataclasses import dataclass, field
from enum import Enum


class RollModifierType(str, Enum):
    """Post-roll transformation, keyed by its notation letter."""

    EXPLODE = "e"
    REMOVE = "r"
    KEEP = "k"
    KEEP_LOWER = "l"

    @classmethod
    def from_letter(cls, letter: str) -> "RollModifierType":
        """Look up a modifier by its letter, ignoring case.

        Raises:
            ValueError: If the letter is not a known modifier.
        """
        return cls(letter.lower())


class Operation(str, Enum):
    """Arithmetic operator used to combine a roll with a number."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


@dataclass(frozen=True)
class DiceRoll:
    """A dice term like 23d45.

    Attributes:
        number_of_dice: How many dice to roll.
        dice_range: Faces per die; each die lands in [1, dice_range].
    """

    number_of_dice: int
    dice_range: int

    def __str__(self) -> str:
        return f"{self.number_of_dice}d{self.dice_range}"


@dataclass(frozen=True)
class RollModifier:
    """A single modifier such as e32 or r12."""

    modifier_type: RollModifierType
    value: int

    def __str__(self) -> str:
        return f"{self.modifier_type.value}{self.value}"


@dataclass(frozen=True)
class ComplexDiceRoll:
    """A dice term plus the modifiers applied to it, in notation order.

    Attributes:
        dice_roll: The base dice term.
        modifiers: Modifiers in the order they appeared in the text.
    """

    dice_roll: DiceRoll
    modifiers: tuple[RollModifier, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return " ".join([str(self.dice_roll), *(str(m) for m in self.modifiers)])


# Sorted ascending and never empty; None means every die was removed.
RollOutcome = tuple[int, ...] | None


@dataclass(frozen=True)
class Number:
    """A plain numeric operand."""

    value: float


@dataclass(frozen=True)
class Roll:
    """A rolled operand; counts as the sum of its dice, or 0 when empty."""

    outcome: RollOutcome


RollScalar = Number | Roll


@dataclass(frozen=True)
class ScalarCalculation:
    """Two operands joined by one operator, evaluated left to right."""

    first: RollScalar
    second: RollScalar
    operation: Operation


@dataclass(frozen=True)
class RollSummary:
    """Aggregate view of a finished roll.

    Attributes:
        kept_rolls: The outcome that was summarized (empty if no dice remained).
        total: Sum of the kept dice.
        successes: Dice at or above the success threshold (0 if none given).
        failures: Dice at or below the failure threshold (0 if none given).
    """

    kept_rolls: tuple[int, ...]
    total: int
    successes: int = 0
    failures: int = 0

    @property
    def is_empty(self) -> bool:
        """True when no dice remained after modifiers."""
        return not self.kept_rolls
