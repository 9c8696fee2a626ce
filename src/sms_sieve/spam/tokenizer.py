# =============================================================================
# Message Tokenizer
# =============================================================================
# Converts raw SMS text into the normalized tokens the classifier consumes.
#
# Normalization is deliberately plain:
#   - Anything that isn't a letter (punctuation, digits, symbols) becomes
#     a space
#   - Everything is lowercased
#   - Runs of whitespace collapse, then we split
#
# Optionally, tokens can be filtered against a dictionary (a word list file),
# which throws away typos, codes, and other junk that would only bloat the
# vocabulary.
# =============================================================================

import logging
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class TokenizerConfig:
    """
    Configuration for message tokenization.

    Attributes:
        min_token_length: Minimum length for a token to be included.
                          The vocabulary applies its own (stricter) rule,
                          so this only matters for what reaches N(class).
        dictionary_path: Word list used for dictionary filtering.
                         Empty string disables the filter.
    """
    min_token_length: int = 1
    dictionary_path: str = ""


def load_dictionary(path: Path) -> frozenset[str]:
    """
    Load a word list for dictionary filtering.

    One word per line. Blank lines and lines starting with '#' are skipped.
    Words are lowercased so they match tokenizer output.

    Args:
        path: Path to the word list.

    Returns:
        Frozen set of dictionary words.
    """
    words = set()
    with open(path, encoding="utf-8") as f:
        for line in f:
            word = line.strip().lower()
            if not word or word.startswith("#"):
                continue
            words.add(word)

    logger.debug(f"Loaded {len(words)} dictionary words from {path}")
    return frozenset(words)


class Tokenizer:
    """
    Converts message text into tokens for spam classification.

    Usage:
        >>> tokenizer = Tokenizer()
        >>> tokenizer.tokenize("WINNER!! Claim your 1000 prize now")
        ['winner', 'claim', 'your', 'prize', 'now']
    """

    # Everything that isn't an ASCII or Unicode letter
    NON_LETTER = re.compile(r"[\W\d_]+", re.UNICODE)

    def __init__(
        self,
        config: TokenizerConfig | None = None,
        dictionary: frozenset[str] | None = None,
    ) -> None:
        """
        Initialize the tokenizer.

        Args:
            config: Tokenizer configuration.
            dictionary: Allowed words. If None and the config names a
                        dictionary file, the file is loaded.
        """
        self.config = config or TokenizerConfig()

        if dictionary is None and self.config.dictionary_path:
            dictionary = load_dictionary(Path(self.config.dictionary_path))
        self.dictionary = dictionary

    def tokenize(self, raw_message: str) -> list[str]:
        """
        Tokenize a raw message.

        Args:
            raw_message: Message text as it appears in the corpus.

        Returns:
            Ordered list of normalized tokens (repeats preserved).
        """
        text = self.NON_LETTER.sub(" ", raw_message).lower()

        tokens = []
        for word in text.split():
            if len(word) < self.config.min_token_length:
                continue
            if self.dictionary is not None and word not in self.dictionary:
                continue
            tokens.append(word)

        return tokens
