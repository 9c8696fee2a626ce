# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the SMS Sieve test suite.
# =============================================================================

import pytest
import tempfile
from pathlib import Path

from sms_sieve.spam import (
    ClassPriors,
    FrequencyTable,
    Label,
    LabeledMessage,
    NaiveBayesModel,
    Vocabulary,
    train_model,
)


SPAM_TEXTS = [
    "WINNER!! You have won a cash prize, call now",
    "Free entry to win a prize. Text WIN now",
    "Claim your free cash reward now!!!",
    "URGENT you won a free holiday, claim now",
    "Win cash now, reply WIN to claim",
]

HAM_TEXTS = [
    "Hi mum, see you later for dinner",
    "Are we still on for lunch today?",
    "Ok thanks, I will call you when I get home",
    "Running late, see you at the station soon",
    "Can you pick up some milk on the way home",
    "Lunch at noon sounds good to me",
    "Did you finish the report for tomorrow",
]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def training_messages():
    """
    A tiny tokenized training corpus: 3 spam, 7 ham.

    Priors are 0.3 / 0.7. The single-letter "a" never enters the vocabulary.
    """
    spam = [
        ["win", "cash", "prize", "now"],
        ["free", "prize", "claim", "now"],
        ["win", "free", "cash"],
    ]
    ham = [
        ["hi", "mum", "see", "you", "later"],
        ["are", "we", "still", "on", "for", "lunch"],
        ["see", "you", "at", "lunch"],
        ["call", "me", "a", "bit", "later"],
        ["ok", "thanks", "mum"],
        ["running", "late", "see", "you", "soon"],
        ["lunch", "at", "noon"],
    ]
    return (
        [LabeledMessage.of(Label.SPAM, tokens) for tokens in spam]
        + [LabeledMessage.of(Label.HAM, tokens) for tokens in ham]
    )


@pytest.fixture
def trained_model(training_messages):
    """Model fitted on the tiny training corpus."""
    return NaiveBayesModel.fit(training_messages)


@pytest.fixture
def scenario_model():
    """
    Hand-built model with known counts.

    Vocabulary {free, hello, win, world}; count(free, spam)=3,
    count(win, spam)=2, every other count 0; N(spam)=10, N(ham)=20;
    P(spam)=0.15.
    """
    vocabulary = Vocabulary(tokens=("free", "hello", "win", "world"))
    table = FrequencyTable(
        vocabulary=vocabulary,
        spam_counts=(3, 0, 2, 0),
        ham_counts=(0, 0, 0, 0),
        spam_total=10,
        ham_total=20,
    )
    return train_model(vocabulary, table, ClassPriors(spam=0.15, ham=0.85))


@pytest.fixture
def corpus_file(temp_dir):
    """
    A tab-separated corpus with a header row: 30 spam, 70 ham.
    """
    path = temp_dir / "corpus.tsv"
    lines = ["Label\tSMS"]
    for i in range(30):
        lines.append(f"spam\t{SPAM_TEXTS[i % len(SPAM_TEXTS)]} {i}")
    for i in range(70):
        lines.append(f"ham\t{HAM_TEXTS[i % len(HAM_TEXTS)]} {i}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_xdg(temp_dir, monkeypatch):
    """Keep tests away from the real user's config and data directories."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(temp_dir / "data"))
