"""Option contract model: value types shared by every pricer."""

from .greeks import Greeks
from .option import Option
from .positive import Positive, pos, to_decimal
from .types import ExerciseStyle, ExpirationDate, OptionStyle, Side

__all__ = [
    "ExerciseStyle",
    "ExpirationDate",
    "Greeks",
    "Option",
    "OptionStyle",
    "Positive",
    "Side",
    "pos",
    "to_decimal",
]
