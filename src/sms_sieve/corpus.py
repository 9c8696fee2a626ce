# =============================================================================
# Corpus Loading and Splitting
# =============================================================================
# Gets labeled messages off disk and into train / validation / test subsets.
#
# The corpus is a delimited text file (the classic SMS Spam Collection is
# tab-separated) with one label column ("spam" / "ham") and one text column.
#
# Splits are stratified: each subset keeps roughly the corpus' spam ratio.
# That matters here because spam is usually the minority class, and an
# unlucky shuffle can leave a small validation set with almost no spam.
# =============================================================================

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

import pandas as pd
from sklearn.model_selection import train_test_split

from sms_sieve.spam.labels import InvalidInputError, Label, LabeledMessage
from sms_sieve.spam.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawMessage:
    """
    A corpus entry before tokenization.

    Attributes:
        label: The message's class.
        text: The message text as stored in the corpus.
    """
    label: Label
    text: str


@dataclass(frozen=True)
class CorpusSplit:
    """
    Three disjoint subsets of a corpus.

    Attributes:
        train: Messages the model is trained on.
        validation: Held-out messages used to pick alpha.
        test: Held-out messages used for the final accuracy figure.
    """
    train: tuple[RawMessage, ...]
    validation: tuple[RawMessage, ...]
    test: tuple[RawMessage, ...]


def load_corpus(
    path: Path,
    *,
    label_column: str = "Label",
    text_column: str = "SMS",
    separator: str = "\t",
    has_header: bool = True,
    encoding: str = "utf-8",
) -> list[RawMessage]:
    """
    Load a labeled corpus from a delimited text file.

    Args:
        path: Corpus file.
        label_column: Name of the label column (header files only).
        text_column: Name of the text column (header files only).
        separator: Field delimiter.
        has_header: Whether the first row holds column names. Without a
                    header, the first two columns are label and text.
        encoding: File encoding.

    Returns:
        Messages in file order.

    Raises:
        CorpusError: If the file is missing, can't be parsed, lacks the
                     expected columns, or contains an unknown label.
    """
    path = Path(path)
    if not path.exists():
        raise CorpusError(f"Corpus file not found: {path}")

    try:
        frame = pd.read_csv(
            path,
            sep=separator,
            header=0 if has_header else None,
            dtype=str,
            keep_default_na=False,
            encoding=encoding,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise CorpusError(f"Could not read corpus {path}: {e}") from e

    if not has_header:
        if frame.shape[1] < 2:
            raise CorpusError(f"Corpus {path} needs at least two columns")
        frame = frame.iloc[:, :2].copy()
        frame.columns = [label_column, text_column]

    missing = [c for c in (label_column, text_column) if c not in frame.columns]
    if missing:
        raise CorpusError(f"Corpus {path} is missing column(s): {', '.join(missing)}")

    frame = frame.fillna("")

    messages = []
    for row_number, (label, text) in enumerate(
        zip(frame[label_column], frame[text_column]), start=1
    ):
        try:
            messages.append(RawMessage(label=Label.parse(label), text=text))
        except InvalidInputError as e:
            raise CorpusError(f"Row {row_number} of {path}: {e}") from e

    logger.info(f"Loaded {len(messages)} messages from {path}")
    return messages


def check_split_ratios(train_ratio: float, validation_ratio: float, test_ratio: float) -> None:
    """
    Check that split ratios are each in (0, 1) and add up to 1.

    Raises:
        CorpusError: On the first bad ratio.
    """
    ratios = {"train": train_ratio, "validation": validation_ratio, "test": test_ratio}
    for name, ratio in ratios.items():
        if not 0 < ratio < 1:
            raise CorpusError(f"The {name} ratio must be between 0 and 1, got {ratio}")

    total = train_ratio + validation_ratio + test_ratio
    if abs(total - 1.0) > 1e-9:
        raise CorpusError(f"Split ratios must add up to 1, got {total}")


def split_corpus(
    messages: Sequence[RawMessage],
    *,
    train_ratio: float = 0.8,
    validation_ratio: float = 0.1,
    test_ratio: float = 0.1,
    seed: int = 1,
) -> CorpusSplit:
    """
    Split a corpus into stratified, disjoint train / validation / test sets.

    The same seed always gives the same split.

    Raises:
        CorpusError: If the ratios are invalid, or a class has too few
                     messages to be spread over every subset.
    """
    check_split_ratios(train_ratio, validation_ratio, test_ratio)

    messages = list(messages)
    labels = [m.label.value for m in messages]

    try:
        train, rest, _, rest_labels = train_test_split(
            messages,
            labels,
            train_size=train_ratio,
            stratify=labels,
            random_state=seed,
        )
        validation, test = train_test_split(
            rest,
            train_size=validation_ratio / (validation_ratio + test_ratio),
            stratify=rest_labels,
            random_state=seed,
        )
    except ValueError as e:
        raise CorpusError(f"Cannot split corpus of {len(messages)} messages: {e}") from e

    logger.info(
        f"Split corpus: {len(train)} train, {len(validation)} validation, "
        f"{len(test)} test"
    )
    return CorpusSplit(train=tuple(train), validation=tuple(validation), test=tuple(test))


def tokenize_corpus(
    messages: Iterable[RawMessage],
    tokenizer: Tokenizer,
) -> list[LabeledMessage]:
    """Tokenize raw messages, keeping their labels."""
    return [
        LabeledMessage(label=m.label, tokens=tuple(tokenizer.tokenize(m.text)))
        for m in messages
    ]


# =============================================================================
# Exceptions
# =============================================================================

class CorpusError(Exception):
    """Raised when a corpus can't be loaded or split."""
    pass
