# =============================================================================
# Labels and Labeled Messages
# =============================================================================
# The two classes the filter can assign, and the (label, tokens) pairs the
# model is trained and evaluated on.
#
# Also home to the spam filter's exception hierarchy, since everything else
# in this package imports from here.
# =============================================================================

from dataclasses import dataclass
from enum import Enum


class Label(Enum):
    """
    Message classes.

    The string values match the labels used in SMS spam corpora, so
    `Label("spam")` works directly on raw corpus values.
    """
    SPAM = "spam"
    HAM = "ham"

    @classmethod
    def parse(cls, text: str) -> "Label":
        """
        Parse a label from corpus text (case and surrounding whitespace
        are ignored).

        Raises:
            InvalidInputError: If the text is neither "spam" nor "ham".
        """
        try:
            return cls(str(text).strip().lower())
        except ValueError as e:
            raise InvalidInputError(f"Unknown label: {text!r}") from e


@dataclass(frozen=True)
class LabeledMessage:
    """
    A tokenized message with its known class.

    Attributes:
        label: The message's true class.
        tokens: Normalized tokens in message order. Repeats are kept;
                they count toward class totals during training.
    """
    label: Label
    tokens: tuple[str, ...] = ()

    @classmethod
    def of(cls, label: Label | str, tokens) -> "LabeledMessage":
        """Build a message from any label spelling and token iterable."""
        if not isinstance(label, Label):
            label = Label.parse(label)
        return cls(label=label, tokens=tuple(tokens))


# =============================================================================
# Exceptions
# =============================================================================

class SpamFilterError(Exception):
    """Base exception for spam filter operations."""
    pass


class InvalidParameterError(SpamFilterError):
    """Raised when a smoothing parameter is not a positive finite number."""
    pass


class InvalidInputError(SpamFilterError):
    """Raised when input data can't support the requested computation."""
    pass
