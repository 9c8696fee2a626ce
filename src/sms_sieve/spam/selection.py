# =============================================================================
# Smoothing Parameter Selection
# =============================================================================
# Picks alpha by held-out accuracy.
#
# Each alpha candidate is an independent trial: classify every message of a
# fixed evaluation set with that alpha and count how many come out right.
# Trials only read the trained model, so they can run on a thread pool with
# no locking at all.
#
# A bad candidate (alpha <= 0) doesn't sink the sweep: its entry in the
# report is marked as failed and the other candidates still get scored.
# =============================================================================

import logging
from collections.abc import Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from sms_sieve.spam.classifier import NaiveBayesModel, check_alpha
from sms_sieve.spam.labels import (
    InvalidInputError,
    InvalidParameterError,
    Label,
    LabeledMessage,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepResult:
    """
    Outcome of one alpha candidate.

    Attributes:
        alpha: The candidate, exactly as it was given.
        accuracy: Fraction of evaluation messages classified correctly,
                  or None if the candidate failed.
        error: Why the candidate failed, or None on success.
    """
    alpha: float
    accuracy: float | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Returns True if this candidate couldn't be evaluated."""
        return self.error is not None


@dataclass(frozen=True)
class EvaluationReport:
    """
    Accuracy of every alpha candidate, in the order they were given.

    Attributes:
        results: One entry per candidate.
    """
    results: tuple[SweepResult, ...] = ()

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[SweepResult]:
        return iter(self.results)

    def __getitem__(self, index: int) -> SweepResult:
        return self.results[index]

    @property
    def successful(self) -> list[SweepResult]:
        """Entries that have an accuracy."""
        return [r for r in self.results if not r.failed]

    def best(self) -> SweepResult | None:
        """
        The most accurate candidate.

        Ties go to the candidate listed first. Returns None if every
        candidate failed (or there were none).
        """
        best = None
        for result in self.successful:
            if best is None or result.accuracy > best.accuracy:
                best = result
        return best


def predict(
    model: NaiveBayesModel,
    messages: Iterable[Sequence[str]],
    alpha: float,
) -> list[Label]:
    """Classify each tokenized message, in order."""
    alpha = check_alpha(alpha)
    return [model.classify(tokens, alpha) for tokens in messages]


def evaluate(
    model: NaiveBayesModel,
    evaluation_set: Sequence[LabeledMessage],
    alpha: float,
) -> float:
    """
    Accuracy of the model on a labeled set with one alpha.

    Returns:
        Correct predictions / total messages, in [0, 1].

    Raises:
        InvalidInputError: If the evaluation set is empty.
        InvalidParameterError: If alpha is invalid.
    """
    if not evaluation_set:
        raise InvalidInputError("Evaluation set is empty; accuracy is undefined")

    predictions = predict(model, (m.tokens for m in evaluation_set), alpha)
    correct = sum(
        predicted is message.label
        for predicted, message in zip(predictions, evaluation_set)
    )
    return correct / len(evaluation_set)


def _run_trial(
    model: NaiveBayesModel,
    evaluation_set: Sequence[LabeledMessage],
    alpha: float,
) -> SweepResult:
    try:
        accuracy = evaluate(model, evaluation_set, alpha)
    except InvalidParameterError as e:
        logger.warning(f"Alpha candidate {alpha!r} failed: {e}")
        return SweepResult(alpha=alpha, error=str(e))

    logger.info(f"alpha={alpha}: accuracy {accuracy:.4f}")
    return SweepResult(alpha=alpha, accuracy=accuracy)


def sweep_alpha(
    model: NaiveBayesModel,
    alpha_candidates: Iterable[float],
    evaluation_set: Iterable[LabeledMessage],
    *,
    max_workers: int | None = None,
) -> EvaluationReport:
    """
    Score every alpha candidate against a held-out labeled set.

    Args:
        model: Trained model. Only read, never modified.
        alpha_candidates: Alphas to try. The report keeps this order.
        evaluation_set: Labeled messages disjoint from the training data.
        max_workers: Thread pool size. None or 1 runs candidates one
                     after another.

    Returns:
        The report. Invalid candidates show up as failed entries.

    Raises:
        InvalidInputError: If the evaluation set is empty.
    """
    evaluation_set = tuple(evaluation_set)
    if not evaluation_set:
        raise InvalidInputError("Evaluation set is empty; accuracy is undefined")

    candidates = list(alpha_candidates)
    logger.info(
        f"Sweeping {len(candidates)} alpha candidates over "
        f"{len(evaluation_set)} messages"
    )

    def trial(alpha: float) -> SweepResult:
        return _run_trial(model, evaluation_set, alpha)

    if max_workers is None or max_workers <= 1 or len(candidates) <= 1:
        results = [trial(alpha) for alpha in candidates]
    else:
        executor = ThreadPoolExecutor(max_workers=max_workers)
        try:
            # map() yields in submission order, whatever order trials finish in
            results = list(executor.map(trial, candidates))
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

    return EvaluationReport(results=tuple(results))
