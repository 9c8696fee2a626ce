# =============================================================================
# Naive Bayes Spam Classifier
# =============================================================================
# Multinomial Naive Bayes over a fixed vocabulary.
#
# How it works:
#   1. Training fixes three things: the vocabulary, the per-class token
#      counts (frequency table), and the class priors
#   2. For classification, with smoothing constant alpha:
#      P(token|c) = (count(token, c) + alpha) / (N(c) + alpha * |V|)
#      Score(c)   = P(c) * product of P(token|c)
#   3. Spam wins only if Score(spam) > Score(ham); ties go to ham
#
# Two scoring rules to be aware of:
#   - Each distinct token counts once, no matter how often it repeats
#   - Tokens outside the vocabulary are skipped (no factor at all)
#
# Alpha isn't part of the trained state. It's passed on every call, so the
# same trained model can be rescored with any alpha without retraining.
#
# We sum log probabilities instead of multiplying, since products of many
# small probabilities underflow to zero on long messages.
# =============================================================================

import json
import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from numbers import Real
from pathlib import Path

from sms_sieve.spam.frequency import FrequencyTable, build_frequency_table
from sms_sieve.spam.labels import (
    InvalidInputError,
    InvalidParameterError,
    Label,
    LabeledMessage,
)
from sms_sieve.spam.vocabulary import Vocabulary, build_vocabulary

logger = logging.getLogger(__name__)

# Version of the saved model format
MODEL_FORMAT_VERSION = 1


@dataclass(frozen=True)
class ClassPriors:
    """
    Unconditional class probabilities.

    Attributes:
        spam: P(spam), the fraction of training messages that are spam.
        ham: P(ham), always 1 - P(spam).
    """
    spam: float
    ham: float

    @classmethod
    def from_counts(cls, spam_count: int, ham_count: int) -> "ClassPriors":
        """
        Compute priors from training message counts.

        Raises:
            InvalidInputError: If there are no training messages at all.
        """
        total = spam_count + ham_count
        if total <= 0:
            raise InvalidInputError(
                "Cannot compute class priors from an empty training corpus"
            )

        spam = spam_count / total
        return cls(spam=spam, ham=1.0 - spam)

    def of(self, label: Label) -> float:
        """Prior probability of one class."""
        return self.spam if label is Label.SPAM else self.ham


def check_alpha(alpha: Real) -> float:
    """
    Validate a smoothing constant.

    Any real number is accepted (int, float, Fraction, numpy scalars), but
    booleans are not.

    Returns:
        Alpha as a float.

    Raises:
        InvalidParameterError: If alpha isn't a positive finite number.
    """
    if isinstance(alpha, bool) or not isinstance(alpha, Real):
        raise InvalidParameterError(f"Alpha must be a number, got {alpha!r}")
    if not math.isfinite(alpha) or alpha <= 0:
        raise InvalidParameterError(f"Alpha must be positive and finite, got {alpha!r}")
    return float(alpha)


def _log(probability: float) -> float:
    # A class with prior 0 can never win
    return math.log(probability) if probability > 0 else -math.inf


@dataclass(frozen=True)
class NaiveBayesModel:
    """
    A trained spam/ham classifier.

    Everything here is fixed at training time and never mutated, so one
    model can be shared freely between threads.

    Attributes:
        vocabulary: Tokens the model knows about.
        frequencies: Per-class token counts.
        priors: Class priors.

    Usage:
        >>> model = NaiveBayesModel.fit(training_messages)
        >>> model.classify(["free", "prize"], alpha=1.0)
        <Label.SPAM: 'spam'>
    """
    vocabulary: Vocabulary
    frequencies: FrequencyTable
    priors: ClassPriors

    @classmethod
    def fit(cls, messages: Iterable[LabeledMessage]) -> "NaiveBayesModel":
        """
        Train a model from labeled messages.

        Runs the whole pipeline: priors, vocabulary, frequency table.

        Args:
            messages: Labeled, tokenized training messages.

        Returns:
            Trained model.

        Raises:
            InvalidInputError: If there are no training messages.
        """
        messages = list(messages)
        spam = [m.tokens for m in messages if m.label is Label.SPAM]
        ham = [m.tokens for m in messages if m.label is Label.HAM]

        priors = ClassPriors.from_counts(len(spam), len(ham))
        vocabulary = build_vocabulary(m.tokens for m in messages)
        frequencies = build_frequency_table(vocabulary, spam, ham)

        logger.info(
            f"Trained on {len(spam)} spam / {len(ham)} ham messages, "
            f"vocabulary of {len(vocabulary)} tokens"
        )
        return train_model(vocabulary, frequencies, priors)

    def log_scores(self, tokens: Iterable[str], alpha: float) -> tuple[float, float]:
        """
        Log scores of a message under each class.

        Args:
            tokens: Message tokens (repeats and unknown tokens allowed).
            alpha: Smoothing constant.

        Returns:
            (log Score(spam), log Score(ham)).

        Raises:
            InvalidParameterError: If alpha is invalid.
        """
        alpha = check_alpha(alpha)

        log_spam = _log(self.priors.spam)
        log_ham = _log(self.priors.ham)

        vocab_size = len(self.vocabulary)
        spam_denominator = self.frequencies.spam_total + alpha * vocab_size
        ham_denominator = self.frequencies.ham_total + alpha * vocab_size

        # Each distinct token counts once; unknown tokens contribute nothing
        for token in set(tokens):
            if token not in self.vocabulary:
                continue
            spam_count = self.frequencies.count(token, Label.SPAM)
            ham_count = self.frequencies.count(token, Label.HAM)
            log_spam += math.log((spam_count + alpha) / spam_denominator)
            log_ham += math.log((ham_count + alpha) / ham_denominator)

        return log_spam, log_ham

    def classify(self, tokens: Iterable[str], alpha: float) -> Label:
        """
        Classify a tokenized message.

        Args:
            tokens: Message tokens.
            alpha: Smoothing constant (> 0).

        Returns:
            Label.SPAM if the spam score is strictly higher, else Label.HAM.
            Messages with no known tokens are decided by the priors alone.

        Raises:
            InvalidParameterError: If alpha is invalid.
        """
        log_spam, log_ham = self.log_scores(tokens, alpha)
        return Label.SPAM if log_spam > log_ham else Label.HAM

    def spam_probability(self, tokens: Iterable[str], alpha: float) -> float:
        """
        Posterior P(spam | message), for display.

        The decision rule in classify() doesn't use this.

        Returns:
            Spam probability (0.0 = definitely ham, 1.0 = definitely spam).
        """
        log_spam, log_ham = self.log_scores(tokens, alpha)

        # Softmax over the two classes; subtract the max for stability
        max_log = max(log_spam, log_ham)
        prob_spam = math.exp(log_spam - max_log)
        prob_ham = math.exp(log_ham - max_log)

        return prob_spam / (prob_spam + prob_ham)


def train_model(
    vocabulary: Vocabulary,
    frequency_table: FrequencyTable,
    class_priors: ClassPriors,
) -> NaiveBayesModel:
    """
    Assemble a model from already-built training artifacts.

    Raises:
        ValueError: If the frequency table was built for another vocabulary.
    """
    if frequency_table.vocabulary != vocabulary:
        raise ValueError("Frequency table was built from a different vocabulary")

    return NaiveBayesModel(
        vocabulary=vocabulary,
        frequencies=frequency_table,
        priors=class_priors,
    )


def classify(model: NaiveBayesModel, message_tokens: Sequence[str], alpha: float) -> Label:
    """Classify a tokenized message with the given model and alpha."""
    return model.classify(message_tokens, alpha)


# =============================================================================
# Persistence
# =============================================================================

def save_model(model: NaiveBayesModel, path: Path) -> None:
    """
    Save a trained model as JSON.

    Counts are stored as lists aligned with vocabulary order.

    Args:
        model: Model to save.
        path: Destination file. Parent directories are created.
    """
    table = model.frequencies
    data = {
        "version": MODEL_FORMAT_VERSION,
        "vocabulary": list(model.vocabulary),
        "counts": {
            "spam": list(table.spam_counts),
            "ham": list(table.ham_counts),
        },
        "totals": {
            "spam": table.spam_total,
            "ham": table.ham_total,
        },
        "priors": {
            "spam": model.priors.spam,
            "ham": model.priors.ham,
        },
    }

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)

    logger.info(f"Saved model ({len(model.vocabulary)} tokens) to {path}")


def _find_model_problem(
    vocabulary: Vocabulary,
    frequencies: FrequencyTable,
    priors: ClassPriors,
) -> str | None:
    """Describe the first broken invariant of a loaded model, if any."""
    tokens = list(vocabulary)
    if not all(isinstance(t, str) for t in tokens):
        return "vocabulary tokens must be strings"
    if tokens != sorted(set(tokens)):
        return "vocabulary must be sorted and free of duplicates"

    for label in Label:
        counts = frequencies.class_counts(label).values()
        if any(c < 0 for c in counts):
            return f"negative {label.value} token count"
        if frequencies.total(label) < sum(counts):
            return (
                f"{label.value} total {frequencies.total(label)} is smaller "
                f"than the sum of its token counts"
            )

    if not all(0.0 <= p <= 1.0 for p in (priors.spam, priors.ham)):
        return f"priors must be in [0, 1], got {priors.spam}, {priors.ham}"
    if not math.isclose(priors.spam + priors.ham, 1.0, abs_tol=1e-9):
        return f"priors must add up to 1, got {priors.spam + priors.ham}"

    return None


def load_model(path: Path) -> NaiveBayesModel:
    """
    Load a model saved by save_model().

    Args:
        path: Model file.

    Returns:
        The trained model.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        InvalidInputError: If the file isn't UTF-8 JSON in the model format,
                           or its counts or priors are inconsistent.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidInputError(f"Invalid model file {path}: {e}") from e

    try:
        version = data["version"]
        if version != MODEL_FORMAT_VERSION:
            raise InvalidInputError(f"Unsupported model format version: {version!r}")

        vocabulary = Vocabulary(tokens=tuple(data["vocabulary"]))
        frequencies = FrequencyTable(
            vocabulary=vocabulary,
            spam_counts=tuple(int(c) for c in data["counts"]["spam"]),
            ham_counts=tuple(int(c) for c in data["counts"]["ham"]),
            spam_total=int(data["totals"]["spam"]),
            ham_total=int(data["totals"]["ham"]),
        )
        priors = ClassPriors(
            spam=float(data["priors"]["spam"]),
            ham=float(data["priors"]["ham"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidInputError(f"Invalid model file {path}: {e}") from e

    problem = _find_model_problem(vocabulary, frequencies, priors)
    if problem:
        raise InvalidInputError(f"Invalid model file {path}: {problem}")

    logger.debug(f"Loaded model ({len(vocabulary)} tokens) from {path}")
    return train_model(vocabulary, frequencies, priors)
