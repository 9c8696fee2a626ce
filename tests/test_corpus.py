import pytest

from sms_sieve.corpus import (
    CorpusError,
    RawMessage,
    load_corpus,
    split_corpus,
    tokenize_corpus,
)
from sms_sieve.spam import Label, Tokenizer


class TestLoadCorpus:
    def test_with_header(self, corpus_file):
        messages = load_corpus(corpus_file)
        assert len(messages) == 100
        assert sum(m.label is Label.SPAM for m in messages) == 30
        assert messages[0].label is Label.SPAM
        assert messages[0].text.startswith("WINNER!!")

    def test_without_header(self, temp_dir):
        path = temp_dir / "SMSSpamCollection"
        path.write_text("ham\tGo until jurong point\nspam\tFree entry in 2 a wkly comp\n", encoding="utf-8")

        messages = load_corpus(path, has_header=False)
        assert messages == [
            RawMessage(Label.HAM, "Go until jurong point"),
            RawMessage(Label.SPAM, "Free entry in 2 a wkly comp"),
        ]

    def test_custom_columns(self, temp_dir):
        path = temp_dir / "spam.csv"
        path.write_text("v1,v2\nSPAM,Win now\nHam,\n", encoding="utf-8")

        messages = load_corpus(path, label_column="v1", text_column="v2", separator=",")
        assert messages == [RawMessage(Label.SPAM, "Win now"), RawMessage(Label.HAM, "")]

    def test_missing_file(self, temp_dir):
        with pytest.raises(CorpusError):
            load_corpus(temp_dir / "missing.tsv")

    def test_missing_column(self, corpus_file):
        with pytest.raises(CorpusError, match="Message"):
            load_corpus(corpus_file, text_column="Message")

    def test_unknown_label(self, temp_dir):
        path = temp_dir / "bad.tsv"
        path.write_text("Label\tSMS\nham\thello\nphishing\tclick here\n", encoding="utf-8")
        with pytest.raises(CorpusError, match="Row 2"):
            load_corpus(path)

    def test_empty_file(self, temp_dir):
        path = temp_dir / "empty.tsv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(CorpusError):
            load_corpus(path)


class TestSplitCorpus:
    def test_disjoint_and_complete(self, corpus_file):
        messages = load_corpus(corpus_file)
        split = split_corpus(messages)

        train = {m.text for m in split.train}
        validation = {m.text for m in split.validation}
        test = {m.text for m in split.test}

        assert (len(train), len(validation), len(test)) == (80, 10, 10)
        assert not train & validation
        assert not train & test
        assert not validation & test
        assert train | validation | test == {m.text for m in messages}

    def test_stratified(self, corpus_file):
        split = split_corpus(load_corpus(corpus_file))
        assert sum(m.label is Label.SPAM for m in split.train) == 24
        assert sum(m.label is Label.SPAM for m in split.validation) == 3
        assert sum(m.label is Label.SPAM for m in split.test) == 3

    def test_same_seed_same_split(self, corpus_file):
        messages = load_corpus(corpus_file)
        assert split_corpus(messages, seed=7) == split_corpus(messages, seed=7)

    @pytest.mark.parametrize("ratios", [
        (0.8, 0.1, 0.2),
        (1.0, 0.0, 0.0),
        (0.5, -0.1, 0.6),
    ])
    def test_invalid_ratios(self, corpus_file, ratios):
        train, validation, test = ratios
        with pytest.raises(CorpusError):
            split_corpus(
                load_corpus(corpus_file),
                train_ratio=train,
                validation_ratio=validation,
                test_ratio=test,
            )

    def test_too_small_to_stratify(self):
        messages = [
            RawMessage(Label.SPAM, "win"),
            RawMessage(Label.HAM, "hi"),
            RawMessage(Label.HAM, "hello"),
        ]
        with pytest.raises(CorpusError):
            split_corpus(messages)


def test_tokenize_corpus():
    messages = [RawMessage(Label.SPAM, "WIN cash!!"), RawMessage(Label.HAM, "See you at 5")]
    labeled = tokenize_corpus(messages, Tokenizer())
    assert [m.label for m in labeled] == [Label.SPAM, Label.HAM]
    assert labeled[0].tokens == ("win", "cash")
    assert labeled[1].tokens == ("see", "you", "at")
