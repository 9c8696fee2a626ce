# =============================================================================
# Reporting
# =============================================================================
# Turns raw predictions and sweep results into something a person can read:
#   - Confusion matrix with accuracy / precision / recall / F1
#   - Alpha sweep table
#
# Spam is the positive class throughout. Counting and metrics come from
# sklearn.metrics; labels are passed as their string values because Enum
# members don't sort.
# =============================================================================

from collections.abc import Sequence
from dataclasses import dataclass

from sklearn import metrics

from sms_sieve.spam.labels import Label
from sms_sieve.spam.selection import EvaluationReport

# Row / column order of the sklearn matrix: spam first
LABEL_ORDER = [Label.SPAM.value, Label.HAM.value]


@dataclass(frozen=True)
class ConfusionMatrix:
    """
    Prediction outcomes with spam as the positive class.

    Attributes:
        true_spam: Spam predicted as spam.
        false_spam: Ham predicted as spam (false positives).
        true_ham: Ham predicted as ham.
        false_ham: Spam predicted as ham (false negatives).
        accuracy: Fraction of correct predictions.
        precision: Spam precision, 0.0 when nothing was predicted spam.
        recall: Spam recall, 0.0 when there was no spam.
        f1: Harmonic mean of precision and recall.
    """
    true_spam: int = 0
    false_spam: int = 0
    true_ham: int = 0
    false_ham: int = 0
    accuracy: float = 0.0
    precision: float = 0.0
    recall: float = 0.0
    f1: float = 0.0

    @property
    def total(self) -> int:
        return self.true_spam + self.false_spam + self.true_ham + self.false_ham


def confusion_matrix(
    actual: Sequence[Label],
    predicted: Sequence[Label],
) -> ConfusionMatrix:
    """
    Tabulate predictions against true labels.

    An empty input gives an all-zero matrix.

    Raises:
        ValueError: If the two sequences differ in length.
    """
    if len(actual) != len(predicted):
        raise ValueError(
            f"Got {len(actual)} true labels but {len(predicted)} predictions"
        )
    if not actual:
        return ConfusionMatrix()

    y_true = [label.value for label in actual]
    y_pred = [label.value for label in predicted]

    (true_spam, false_ham), (false_spam, true_ham) = metrics.confusion_matrix(
        y_true, y_pred, labels=LABEL_ORDER
    )
    precision, recall, f1, _ = metrics.precision_recall_fscore_support(
        y_true,
        y_pred,
        pos_label=Label.SPAM.value,
        average="binary",
        zero_division=0,
    )

    return ConfusionMatrix(
        true_spam=int(true_spam),
        false_spam=int(false_spam),
        true_ham=int(true_ham),
        false_ham=int(false_ham),
        accuracy=float(metrics.accuracy_score(y_true, y_pred)),
        precision=float(precision),
        recall=float(recall),
        f1=float(f1),
    )


def format_report(report: EvaluationReport) -> str:
    """
    Render an alpha sweep as a table.

    The best candidate is marked with '*'; failed candidates show why.
    """
    best = report.best()
    lines = [f"{'alpha':>10}  accuracy", f"{'-' * 10}  --------"]

    for result in report:
        if result.failed:
            lines.append(f"{result.alpha!s:>10}  failed: {result.error}")
            continue
        marker = " *" if result is best else ""
        lines.append(f"{result.alpha!s:>10}  {result.accuracy:.4f}{marker}")

    return "\n".join(lines)


def format_confusion(matrix: ConfusionMatrix) -> str:
    """Render a confusion matrix and its metrics."""
    return "\n".join([
        f"{'':>12}{'pred spam':>11}{'pred ham':>10}",
        f"{'actual spam':>12}{matrix.true_spam:>11}{matrix.false_ham:>10}",
        f"{'actual ham':>12}{matrix.false_spam:>11}{matrix.true_ham:>10}",
        "",
        f"accuracy:  {matrix.accuracy:.4f}",
        f"precision: {matrix.precision:.4f}",
        f"recall:    {matrix.recall:.4f}",
        f"f1:        {matrix.f1:.4f}",
    ])
