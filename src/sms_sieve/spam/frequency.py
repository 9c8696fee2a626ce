# =============================================================================
# Frequency Table
# =============================================================================
# Per-class word counts for the Naive Bayes model.
#
# For each class c and each vocabulary token t we keep:
#   count(t, c)  - how many times t occurs across c's training messages
#   N(c)         - total tokens in c's training messages, repeats AND
#                  out-of-vocabulary tokens included
#
# So N(c) >= sum of count(t, c) over the vocabulary, with equality only when
# every token of that class made it into the vocabulary.
#
# Counting is a single pass per class with a Counter; each vocabulary token
# is then an O(1) lookup instead of a scan over the whole corpus.
# =============================================================================

import logging
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from sms_sieve.spam.labels import Label
from sms_sieve.spam.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrequencyTable:
    """
    Read-only token counts per class.

    Counts are stored as tuples aligned with vocabulary order.

    Attributes:
        vocabulary: The vocabulary the counts are aligned to.
        spam_counts: count(t, spam) for each vocabulary token, in order.
        ham_counts: count(t, ham) for each vocabulary token, in order.
        spam_total: N(spam), all tokens seen in spam messages.
        ham_total: N(ham), all tokens seen in ham messages.
    """
    vocabulary: Vocabulary
    spam_counts: tuple[int, ...] = ()
    ham_counts: tuple[int, ...] = ()
    spam_total: int = 0
    ham_total: int = 0

    def __post_init__(self) -> None:
        size = len(self.vocabulary)
        if len(self.spam_counts) != size or len(self.ham_counts) != size:
            raise ValueError(
                f"Count vectors must match vocabulary size {size}, got "
                f"{len(self.spam_counts)} spam and {len(self.ham_counts)} ham"
            )

    @property
    def vocabulary_size(self) -> int:
        """|V|, the number of vocabulary tokens."""
        return len(self.vocabulary)

    def count(self, token: str, label: Label) -> int:
        """
        Occurrences of a token in the training messages of one class.

        Tokens outside the vocabulary have count 0.
        """
        if token not in self.vocabulary:
            return 0
        return self._counts(label)[self.vocabulary.index(token)]

    def total(self, label: Label) -> int:
        """N(label): total token occurrences in that class."""
        return self.spam_total if label is Label.SPAM else self.ham_total

    def class_counts(self, label: Label) -> Mapping[str, int]:
        """Read-only token -> count mapping for one class."""
        return MappingProxyType(dict(zip(self.vocabulary, self._counts(label))))

    def _counts(self, label: Label) -> tuple[int, ...]:
        return self.spam_counts if label is Label.SPAM else self.ham_counts


def _count_class(
    vocabulary: Vocabulary,
    messages: Iterable[Sequence[str]],
) -> tuple[tuple[int, ...], int]:
    """Count one class: (per-vocabulary-token counts, total tokens)."""
    occurrences: Counter[str] = Counter()
    for tokens in messages:
        occurrences.update(tokens)

    counts = tuple(occurrences[token] for token in vocabulary)
    return counts, occurrences.total()


def build_frequency_table(
    vocabulary: Vocabulary,
    spam_messages: Iterable[Sequence[str]],
    ham_messages: Iterable[Sequence[str]],
) -> FrequencyTable:
    """
    Count vocabulary tokens per class.

    Never fails: an empty vocabulary or an empty class just gives
    empty / zero counts.

    Args:
        vocabulary: Vocabulary built from the training corpus.
        spam_messages: Token sequences of the spam training messages.
        ham_messages: Token sequences of the ham training messages.

    Returns:
        The frequency table.
    """
    spam_counts, spam_total = _count_class(vocabulary, spam_messages)
    ham_counts, ham_total = _count_class(vocabulary, ham_messages)

    logger.debug(
        f"Frequency table: |V|={len(vocabulary)}, "
        f"N(spam)={spam_total}, N(ham)={ham_total}"
    )

    return FrequencyTable(
        vocabulary=vocabulary,
        spam_counts=spam_counts,
        ham_counts=ham_counts,
        spam_total=spam_total,
        ham_total=ham_total,
    )
