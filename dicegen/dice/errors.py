"""Exceptions raised by the dice system."""


class DiceError(ValueError):
    """Base error for anything the dice system rejects."""


class DiceParseError(DiceError):
    """Error parsing dice notation.

    Attributes:
        text: The input that failed to parse.
        position: Offset into ``text`` where parsing stopped.
    """

    def __init__(self, message: str, text: str = "", position: int = 0) -> None:
        super().__init__(message)
        self.text = text
        self.position = position


class InvalidRollError(DiceError):
    """A parsed roll whose parameters cannot be evaluated.

    Raised before any die is drawn, e.g. for a zero-sided die or an
    explode threshold that would never stop rolling.
    """
