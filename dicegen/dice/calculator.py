"""Scalar combination of a roll with a plain number.

Folds a roll's total against a number with one of + - * /. Every operand
is reduced to a float first: a Number is its value, a Roll is the sum of
its dice, and a Roll with no dice left counts as 0.0.

Division follows IEEE 754 float semantics: dividing by zero returns inf,
-inf or nan rather than raising ZeroDivisionError.
"""

import logging
import math
import random

from dicegen.dice.errors import DiceParseError
from dicegen.dice.parser import parse_calculation
from dicegen.dice.roller import RandomSource, evaluate
from dicegen.dice.types import (
    Number,
    Operation,
    Roll,
    RollScalar,
    ScalarCalculation,
)

logger = logging.getLogger(__name__)


def to_float(scalar: RollScalar) -> float:
    """Reduce an operand to the number it contributes."""
    match scalar:
        case Number(value=value):
            return float(value)
        case Roll(outcome=None):
            return 0.0
        case Roll(outcome=outcome):
            return float(sum(outcome))
        case _:
            raise AssertionError(f"Unhandled roll scalar: {scalar!r}")


def _divide(first: float, second: float) -> float:
    if second != 0:
        return first / second
    if first == 0 or math.isnan(first):
        return math.nan
    return math.copysign(math.inf, first) * math.copysign(1.0, second)


def combine(first: RollScalar, second: RollScalar, operation: Operation) -> float:
    """Apply ``first <operation> second`` to the reduced operands.

    Division by zero does not raise: x / 0.0 is +/-inf and 0.0 / 0.0 is nan,
    matching IEEE 754. Callers that need an error must check for it.

    Examples:
        >>> combine(Number(5), Number(9), Operation.ADD)
        14.0
        >>> combine(Roll((1, 2, 3, 4)), Number(9.0), Operation.SUBTRACT)
        1.0
        >>> combine(Roll(None), Number(9.0), Operation.ADD)
        9.0
    """
    a = to_float(first)
    b = to_float(second)

    match operation:
        case Operation.ADD:
            return a + b
        case Operation.SUBTRACT:
            return a - b
        case Operation.MULTIPLY:
            return a * b
        case Operation.DIVIDE:
            return _divide(a, b)
        case _:
            raise AssertionError(f"Unhandled operation: {operation!r}")


def calculate(calculation: ScalarCalculation) -> float:
    """Evaluate a ScalarCalculation."""
    return combine(calculation.first, calculation.second, calculation.operation)


def roll_and_calculate(text: str, rng: RandomSource | None = None) -> float:
    """Parse ``<roll> [<op> <number>]``, roll it and combine the result.

    Without an operator the result is the roll's total.

    Raises:
        DiceParseError: If the text is not a roll with an optional scalar,
            or has trailing text.
        InvalidRollError: If the roll parameters cannot be evaluated.

    Examples:
        >>> roll_and_calculate("17d1 k11 r6 * 2")
        10.0
    """
    parsed = parse_calculation(text)
    if parsed.remainder.strip():
        raise DiceParseError(
            f"Unexpected text after calculation: '{parsed.remainder.strip()}'",
            text,
            len(text) - len(parsed.remainder),
        )

    outcome = evaluate(parsed.roll, rng if rng is not None else random.Random())
    if parsed.operation is None:
        return to_float(Roll(outcome))

    calculation = ScalarCalculation(
        first=Roll(outcome),
        second=Number(parsed.scalar),
        operation=parsed.operation,
    )
    result = calculate(calculation)
    logger.debug(f"{parsed.roll} {parsed.operation.value} {parsed.scalar} = {result}")
    return result
