"""Tests for dice notation parser."""

import pytest

from dicegen.dice.errors import DiceParseError
from dicegen.dice.parser import (
    MAX_NUMBER,
    ParsedCalculation,
    ParsedRoll,
    parse_calculation,
    parse_dice_roll,
    parse_operation,
)
from dicegen.dice.types import (
    ComplexDiceRoll,
    DiceRoll,
    Operation,
    RollModifier,
    RollModifierType,
)


class TestParseSimpleRoll:
    """Tests for the dice term on its own."""

    def test_parse_23d45(self):
        """Test parsing a plain dice term."""
        parsed = parse_dice_roll("23d45")
        assert parsed.roll == ComplexDiceRoll(
            dice_roll=DiceRoll(number_of_dice=23, dice_range=45)
        )
        assert parsed.remainder == ""

    def test_parse_with_spaces_around_separator(self):
        """Test whitespace before numbers and around 'd' is skipped."""
        parsed = parse_dice_roll(" 23 d  45")
        assert parsed.roll.dice_roll == DiceRoll(number_of_dice=23, dice_range=45)
        assert parsed.remainder == ""

    def test_parse_uppercase_separator_keeps_trailing_space(self):
        """Test uppercase D and that trailing space is left unconsumed."""
        parsed = parse_dice_roll(" 23 D  45 ")
        assert parsed.roll.dice_roll == DiceRoll(number_of_dice=23, dice_range=45)
        assert parsed.remainder == " "

    def test_parse_tabs_as_whitespace(self):
        """Test tabs count as whitespace."""
        parsed = parse_dice_roll("\t2\td\t6")
        assert parsed.roll.dice_roll == DiceRoll(number_of_dice=2, dice_range=6)

    def test_parse_zero_range_is_syntactically_valid(self):
        """Test 2d0 parses; the roller rejects it."""
        parsed = parse_dice_roll("2d0")
        assert parsed.roll.dice_roll == DiceRoll(number_of_dice=2, dice_range=0)

    def test_trailing_garbage_is_returned(self):
        """Test unparseable trailing text is returned, not an error."""
        parsed = parse_dice_roll("3d6 !!")
        assert parsed.roll.dice_roll == DiceRoll(number_of_dice=3, dice_range=6)
        assert parsed.remainder == " !!"


class TestParseModifiers:
    """Tests for modifiers after the dice term."""

    def test_parse_single_explode(self):
        """Test 23d45e32 yields one explode modifier."""
        parsed = parse_dice_roll("23d45e32")
        assert parsed == ParsedRoll(
            roll=ComplexDiceRoll(
                dice_roll=DiceRoll(number_of_dice=23, dice_range=45),
                modifiers=(RollModifier(RollModifierType.EXPLODE, 32),),
            ),
            remainder="",
        )

    def test_parse_two_modifiers_with_trailing_space(self):
        """Test modifiers keep their order and one trailing space is left."""
        parsed = parse_dice_roll("23d45 e32  R12 ")
        assert parsed.roll == ComplexDiceRoll(
            dice_roll=DiceRoll(number_of_dice=23, dice_range=45),
            modifiers=(
                RollModifier(RollModifierType.EXPLODE, 32),
                RollModifier(RollModifierType.REMOVE, 12),
            ),
        )
        assert parsed.remainder == " "

    def test_parse_all_modifier_letters(self):
        """Test each modifier letter maps to its type."""
        parsed = parse_dice_roll("4d6 e6 r1 k3 l2")
        assert [m.modifier_type for m in parsed.roll.modifiers] == [
            RollModifierType.EXPLODE,
            RollModifierType.REMOVE,
            RollModifierType.KEEP,
            RollModifierType.KEEP_LOWER,
        ]
        assert [m.value for m in parsed.roll.modifiers] == [6, 1, 3, 2]

    def test_parse_modifier_letters_case_insensitive(self):
        """Test uppercase modifier letters."""
        lower = parse_dice_roll("4d6 e6 r1 k3 l2").roll
        upper = parse_dice_roll("4D6 E6 R1 K3 L2").roll
        assert lower == upper

    def test_parse_space_between_letter_and_number(self):
        """Test whitespace is allowed before a modifier's number."""
        parsed = parse_dice_roll("17d1 k 11")
        assert parsed.roll.modifiers == (RollModifier(RollModifierType.KEEP, 11),)

    def test_modifier_order_matters_for_equality(self):
        """Test rolls with the same modifiers in a different order differ."""
        a = parse_dice_roll("17d1 k11 r6").roll
        b = parse_dice_roll("17d1 r6 k11").roll
        assert a != b

    def test_operator_after_modifiers_is_remainder(self):
        """Test an operator is left for the calculation parser."""
        parsed = parse_dice_roll("3d6 k2 + 4")
        assert len(parsed.roll.modifiers) == 1
        assert parsed.remainder == " + 4"


class TestParseErrors:
    """Tests for invalid dice notation."""

    def test_parse_empty_string_raises(self):
        """Test that empty string raises error."""
        with pytest.raises(DiceParseError, match="empty"):
            parse_dice_roll("")

    def test_parse_missing_leading_number_raises(self):
        """Test that the dice count is mandatory."""
        with pytest.raises(DiceParseError, match="Expected a number"):
            parse_dice_roll("d20")

    def test_parse_wrong_separator_raises(self):
        """Test that a separator other than 'd' raises error."""
        with pytest.raises(DiceParseError, match="Expected 'd'"):
            parse_dice_roll("123a123")

    def test_parse_missing_range_raises(self):
        """Test that missing die range raises error."""
        with pytest.raises(DiceParseError, match="Expected a number"):
            parse_dice_roll("2d")

    def test_parse_negative_count_raises(self):
        """Test that signed numbers are rejected."""
        with pytest.raises(DiceParseError):
            parse_dice_roll("-1d6")

    def test_parse_unknown_modifier_raises(self):
        """Test that an unknown modifier letter raises error."""
        with pytest.raises(DiceParseError, match="Unknown roll modifier 'x'"):
            parse_dice_roll("4d6 x3")

    def test_parse_modifier_without_number_raises(self):
        """Test that a known modifier letter needs a number."""
        with pytest.raises(DiceParseError, match="Expected a number"):
            parse_dice_roll("4d6 kx")

    def test_parse_number_out_of_range_raises(self):
        """Test that numbers above 64 bits are rejected."""
        with pytest.raises(DiceParseError, match="out of range"):
            parse_dice_roll(f"{MAX_NUMBER + 1}d6")

    def test_parse_very_long_number_raises(self):
        """Test that thousands of digits fail as a parse error."""
        with pytest.raises(DiceParseError, match="out of range"):
            parse_dice_roll("1" * 5000 + "d6")

    def test_parse_leading_zeros_accepted(self):
        """Test that leading zeros don't count toward the range limit."""
        parsed = parse_dice_roll("0" * 5000 + "3d6")
        assert parsed.roll.dice_roll == DiceRoll(number_of_dice=3, dice_range=6)

    def test_parse_non_ascii_digits_raises(self):
        """Test that only ASCII digits are numbers."""
        with pytest.raises(DiceParseError, match="Expected a number"):
            parse_dice_roll("٣d6")

    def test_parse_non_ascii_modifier_value_raises(self):
        """Test that a modifier value must use ASCII digits."""
        with pytest.raises(DiceParseError, match="Expected a number"):
            parse_dice_roll("3d6 k٣")

    def test_parse_max_number_accepted(self):
        """Test the largest 64-bit value still parses."""
        parsed = parse_dice_roll(f"1d{MAX_NUMBER}")
        assert parsed.roll.dice_roll.dice_range == MAX_NUMBER

    def test_error_records_position(self):
        """Test the error carries where parsing stopped."""
        with pytest.raises(DiceParseError) as exc_info:
            parse_dice_roll("12x4")
        assert exc_info.value.position == 2
        assert exc_info.value.text == "12x4"


class TestParseOperation:
    """Tests for the operator parser."""

    @pytest.mark.parametrize(
        "char,expected",
        [
            ("+", Operation.ADD),
            ("-", Operation.SUBTRACT),
            ("*", Operation.MULTIPLY),
            ("/", Operation.DIVIDE),
        ],
    )
    def test_parse_each_operation(self, char, expected):
        """Test each operator character."""
        assert parse_operation(char) == (expected, "")

    def test_parse_operation_returns_remainder(self):
        """Test the rest of the input is returned."""
        assert parse_operation("/abcd") == (Operation.DIVIDE, "abcd")

    def test_parse_invalid_operation_raises(self):
        """Test an unknown operator raises error."""
        with pytest.raises(DiceParseError, match="Invalid operation"):
            parse_operation("%5")

    def test_parse_empty_operation_raises(self):
        """Test empty input raises error."""
        with pytest.raises(DiceParseError):
            parse_operation("")


class TestParseCalculation:
    """Tests for a roll followed by an operator and a number."""

    def test_parse_roll_plus_number(self):
        """Test a roll with a scalar."""
        calc = parse_calculation("3d6 k2 + 4")
        assert calc.roll.dice_roll == DiceRoll(number_of_dice=3, dice_range=6)
        assert calc.operation == Operation.ADD
        assert calc.scalar == 4.0
        assert calc.remainder == ""

    def test_parse_decimal_scalar(self):
        """Test a decimal scalar without spaces."""
        calc = parse_calculation("2d10/2.5")
        assert calc.operation == Operation.DIVIDE
        assert calc.scalar == 2.5

    def test_parse_roll_without_operation(self):
        """Test a bare roll has no operation or scalar."""
        calc = parse_calculation("2d10 r1 ")
        assert calc == ParsedCalculation(
            roll=parse_dice_roll("2d10 r1").roll,
            remainder=" ",
        )

    def test_parse_operation_without_number_raises(self):
        """Test an operator must be followed by a number."""
        with pytest.raises(DiceParseError, match="Expected a number after '\\*'"):
            parse_calculation("2d10 * x")

    def test_parse_non_ascii_scalar_raises(self):
        """Test the scalar must use ASCII digits."""
        with pytest.raises(DiceParseError, match="Expected a number after '\\+'"):
            parse_calculation("2d10 + ٣")
