"""Dice notation parsing and roll evaluation.

Usage:
    >>> import random
    >>> from dicegen.dice import Number, Operation, Roll, combine, evaluate, parse_dice_roll
    >>> parsed = parse_dice_roll("4d6 k3")
    >>> outcome = evaluate(parsed.roll, random.Random())
    >>> total = combine(Roll(outcome), Number(2), Operation.ADD)
"""

# Types
from dicegen.dice.types import (
    ComplexDiceRoll,
    DiceRoll,
    Number,
    Operation,
    Roll,
    RollModifier,
    RollModifierType,
    RollOutcome,
    RollScalar,
    RollSummary,
    ScalarCalculation,
)

# Errors
from dicegen.dice.errors import DiceError, DiceParseError, InvalidRollError

# Parser
from dicegen.dice.parser import (
    ParsedCalculation,
    ParsedRoll,
    parse_calculation,
    parse_dice_roll,
    parse_operation,
)

# Roller
from dicegen.dice.roller import (
    RandomSource,
    evaluate,
    explode,
    keep,
    keep_lower,
    remove,
    roll,
    roll_dice,
    summarize,
    validate_roll,
)

# Calculator
from dicegen.dice.calculator import (
    calculate,
    combine,
    roll_and_calculate,
    to_float,
)

__all__ = [
    # Types
    "ComplexDiceRoll",
    "DiceRoll",
    "Number",
    "Operation",
    "Roll",
    "RollModifier",
    "RollModifierType",
    "RollOutcome",
    "RollScalar",
    "RollSummary",
    "ScalarCalculation",
    # Errors
    "DiceError",
    "DiceParseError",
    "InvalidRollError",
    # Parser
    "ParsedCalculation",
    "ParsedRoll",
    "parse_calculation",
    "parse_dice_roll",
    "parse_operation",
    # Roller
    "RandomSource",
    "evaluate",
    "explode",
    "keep",
    "keep_lower",
    "remove",
    "roll",
    "roll_dice",
    "summarize",
    "validate_roll",
    # Calculator
    "calculate",
    "combine",
    "roll_and_calculate",
    "to_float",
]
