"""Dice notation parser.

Parses notation like 23d45, 17d1 k11 r6 or 4d6 e6 l3, optionally followed
by one arithmetic operator and a number (3d6 k2 + 4).

Whitespace (spaces and tabs) may appear before any number, around the
dice separator and before each modifier. Parsing stops at the first text
that cannot start a modifier; that text is handed back as the remainder
rather than treated as an error.
"""

import re
from dataclasses import dataclass

from dicegen.dice.errors import DiceParseError
from dicegen.dice.types import (
    ComplexDiceRoll,
    DiceRoll,
    Operation,
    RollModifier,
    RollModifierType,
)


# Largest value a die count, face count or modifier value may take
MAX_NUMBER = 2**64 - 1
_MAX_DIGITS = len(str(MAX_NUMBER))

_NUMBER_RE = re.compile(r"[ \t]*([0-9]+)")
_SEPARATOR_RE = re.compile(r"[ \t]*[dD]")
# A modifier attempt: optional whitespace, one letter, then the rest
_MODIFIER_START_RE = re.compile(r"[ \t]*([A-Za-z])")
_DIGIT_AHEAD_RE = re.compile(r"[ \t]*[0-9]")
_SCALAR_RE = re.compile(r"[ \t]*([0-9]+(?:\.[0-9]+)?)")
_WHITESPACE_RE = re.compile(r"[ \t]*")


@dataclass(frozen=True)
class ParsedRoll:
    """A successfully parsed roll and whatever input was left over."""

    roll: ComplexDiceRoll
    remainder: str = ""


@dataclass(frozen=True)
class ParsedCalculation:
    """A roll optionally followed by ``<operator> <number>``.

    ``operation`` and ``scalar`` are both None when the text held only a roll.
    """

    roll: ComplexDiceRoll
    operation: Operation | None = None
    scalar: float | None = None
    remainder: str = ""


def _parse_number(text: str, pos: int) -> tuple[int, int]:
    """Parse an unsigned integer at ``pos``, skipping leading whitespace."""
    match = _NUMBER_RE.match(text, pos)
    if not match:
        raise DiceParseError(
            f"Expected a number at position {pos} in '{text}'", text, pos
        )

    # Length check first; int() refuses very long digit strings
    digits = match.group(1).lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS or int(digits) > MAX_NUMBER:
        raise DiceParseError(
            f"Number at position {match.start(1)} is out of range (max {MAX_NUMBER})",
            text,
            match.start(1),
        )
    return int(digits), match.end()


def _parse_simple_roll(text: str, pos: int) -> tuple[DiceRoll, int]:
    number_of_dice, pos = _parse_number(text, pos)

    separator = _SEPARATOR_RE.match(text, pos)
    if not separator:
        raise DiceParseError(
            f"Expected 'd' after the dice count at position {pos} in '{text}'",
            text,
            pos,
        )

    dice_range, pos = _parse_number(text, separator.end())
    return DiceRoll(number_of_dice=number_of_dice, dice_range=dice_range), pos


def _parse_modifier(text: str, pos: int) -> tuple[RollModifier, int] | None:
    """Parse one modifier at ``pos``.

    Returns None when the text there does not start a modifier, so the
    caller can stop and leave it in the remainder.

    Raises:
        DiceParseError: If a letter is followed by a number but is not a known
            modifier, or a known modifier letter has no valid number after it.
    """
    match = _MODIFIER_START_RE.match(text, pos)
    if not match:
        return None

    letter = match.group(1)
    try:
        modifier_type = RollModifierType.from_letter(letter)
    except ValueError:
        if _DIGIT_AHEAD_RE.match(text, match.end()):
            raise DiceParseError(
                f"Unknown roll modifier '{letter}' in '{text}'", text, match.start(1)
            ) from None
        return None

    value, end = _parse_number(text, match.end())
    return RollModifier(modifier_type=modifier_type, value=value), end


def _parse_complex_roll(text: str) -> tuple[ComplexDiceRoll, int]:
    if not text or not text.strip():
        raise DiceParseError("Dice notation cannot be empty", text, 0)

    dice_roll, pos = _parse_simple_roll(text, 0)

    modifiers = []
    while (parsed := _parse_modifier(text, pos)) is not None:
        modifier, pos = parsed
        modifiers.append(modifier)

    return ComplexDiceRoll(dice_roll=dice_roll, modifiers=tuple(modifiers)), pos


def parse_dice_roll(notation: str) -> ParsedRoll:
    """Parse dice notation into a ComplexDiceRoll.

    Args:
        notation: Dice notation string (e.g., "23d45", "17d1 k11 r6").

    Returns:
        ParsedRoll holding the roll and the unconsumed input.

    Raises:
        DiceParseError: If the leading dice term is malformed, the separator
            is not 'd'/'D', or a modifier is unknown or missing its number.

    Examples:
        >>> parse_dice_roll("23d45e32").roll.modifiers
        (RollModifier(modifier_type=<RollModifierType.EXPLODE: 'e'>, value=32),)
        >>> parse_dice_roll("23d45 e32  R12 ").remainder
        ' '
    """
    roll, pos = _parse_complex_roll(notation)
    return ParsedRoll(roll=roll, remainder=notation[pos:])


def parse_operation(text: str) -> tuple[Operation, str]:
    """Parse a single operator character from the start of ``text``.

    Returns:
        The operation and the rest of the text.

    Raises:
        DiceParseError: If the first character is not one of + - * /.
    """
    if not text:
        raise DiceParseError("Expected an operator, got end of input", text, 0)
    try:
        return Operation(text[0]), text[1:]
    except ValueError:
        raise DiceParseError(
            f"Invalid operation '{text[0]}'. Expected one of +, -, *, or /",
            text,
            0,
        ) from None


def parse_calculation(text: str) -> ParsedCalculation:
    """Parse a roll optionally followed by an operator and a number.

    Examples:
        >>> calc = parse_calculation("3d6 k2 + 4")
        >>> calc.operation, calc.scalar
        (<Operation.ADD: '+'>, 4.0)
    """
    roll, pos = _parse_complex_roll(text)

    op_start = _WHITESPACE_RE.match(text, pos).end()
    if op_start == len(text) or text[op_start] not in "+-*/":
        return ParsedCalculation(roll=roll, remainder=text[pos:])

    operation, _ = parse_operation(text[op_start:])
    scalar = _SCALAR_RE.match(text, op_start + 1)
    if not scalar:
        raise DiceParseError(
            f"Expected a number after '{operation.value}' in '{text}'",
            text,
            op_start + 1,
        )

    return ParsedCalculation(
        roll=roll,
        operation=operation,
        scalar=float(scalar.group(1)),
        remainder=text[scalar.end():],
    )
