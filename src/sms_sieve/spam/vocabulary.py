# =============================================================================
# Vocabulary
# =============================================================================
# The fixed, sorted set of tokens the model reasons about. Built once from
# the training messages and never changed afterwards.
#
# Sorting gives every token a stable position, so per-token count vectors
# line up across runs (and across saved model files).
# =============================================================================

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

# Tokens shorter than this never make it into the vocabulary
MIN_TOKEN_LENGTH = 2


@dataclass(frozen=True)
class Vocabulary:
    """
    Immutable ordered set of unique tokens.

    Attributes:
        tokens: Tokens in lexicographic order, no duplicates.

    Usage:
        >>> vocab = build_vocabulary([["win", "cash"], ["hi", "cash"]])
        >>> list(vocab)
        ['cash', 'hi', 'win']
        >>> vocab.index("hi")
        1
    """
    tokens: tuple[str, ...] = ()
    _positions: Mapping[str, int] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        positions = {token: i for i, token in enumerate(self.tokens)}
        object.__setattr__(self, "_positions", MappingProxyType(positions))

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __contains__(self, token: object) -> bool:
        return token in self._positions

    def index(self, token: str) -> int:
        """
        Position of a token in vocabulary order.

        Raises:
            KeyError: If the token isn't in the vocabulary.
        """
        return self._positions[token]


def build_vocabulary(training_messages: Iterable[Sequence[str]]) -> Vocabulary:
    """
    Build the vocabulary from tokenized training messages.

    Flattens all messages, drops duplicates and tokens shorter than
    MIN_TOKEN_LENGTH, and sorts what's left. An empty corpus gives an
    empty vocabulary.

    Args:
        training_messages: Token sequences of the training corpus.

    Returns:
        The vocabulary.
    """
    unique = {
        token
        for tokens in training_messages
        for token in tokens
        if len(token) >= MIN_TOKEN_LENGTH
    }
    return Vocabulary(tokens=tuple(sorted(unique)))
