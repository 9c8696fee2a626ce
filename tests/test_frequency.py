import pytest

from sms_sieve.spam import (
    FrequencyTable,
    Label,
    Vocabulary,
    build_frequency_table,
    build_vocabulary,
)


@pytest.fixture
def table(training_messages):
    vocab = build_vocabulary(m.tokens for m in training_messages)
    spam = [m.tokens for m in training_messages if m.label is Label.SPAM]
    ham = [m.tokens for m in training_messages if m.label is Label.HAM]
    return build_frequency_table(vocab, spam, ham)


class TestBuildFrequencyTable:
    def test_counts_repeats(self, table):
        assert table.count("win", Label.SPAM) == 2
        assert table.count("prize", Label.SPAM) == 2
        assert table.count("see", Label.HAM) == 3
        assert table.count("win", Label.HAM) == 0

    def test_totals_include_out_of_vocabulary_tokens(self, table):
        assert table.total(Label.SPAM) == 11
        # "a" is in a ham message but not in the vocabulary
        assert table.total(Label.HAM) == 31
        assert "a" not in table.vocabulary
        assert table.count("a", Label.HAM) == 0

    def test_totals_bound_counts(self, table):
        for label in Label:
            assert table.total(label) >= sum(table.class_counts(label).values())
            assert all(c >= 0 for c in table.class_counts(label).values())

    def test_out_of_vocabulary_only(self):
        vocab = Vocabulary(tokens=("hello",))
        table = build_frequency_table(vocab, [["win", "win"]], [["hello", "there"]])
        assert table.count("hello", Label.SPAM) == 0
        assert table.total(Label.SPAM) == 2
        assert table.count("hello", Label.HAM) == 1
        assert table.total(Label.HAM) == 2

    def test_empty_vocabulary(self):
        table = build_frequency_table(Vocabulary(), [["win"]], [])
        assert table.vocabulary_size == 0
        assert table.spam_counts == ()
        assert table.total(Label.SPAM) == 1
        assert table.total(Label.HAM) == 0

    def test_matches_naive_count(self, training_messages, table):
        for label in Label:
            flat = [t for m in training_messages if m.label is label for t in m.tokens]
            for token in table.vocabulary:
                assert table.count(token, label) == flat.count(token)


class TestFrequencyTable:
    def test_class_counts_read_only(self, table):
        counts = table.class_counts(Label.SPAM)
        with pytest.raises(TypeError):
            counts["win"] = 100

    def test_rejects_misaligned_counts(self):
        with pytest.raises(ValueError):
            FrequencyTable(vocabulary=Vocabulary(tokens=("a1", "b2")), spam_counts=(1,), ham_counts=(0, 0))
