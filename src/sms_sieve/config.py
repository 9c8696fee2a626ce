# =============================================================================
# Configuration Management
# =============================================================================
# Handles loading, saving, and validating SMS Sieve configuration.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/sms-sieve/  (default: ~/.config/sms-sieve/)
#   - Data:    $XDG_DATA_HOME/sms-sieve/    (default: ~/.local/share/sms-sieve/)
#
# Files:
#   - config.toml: User configuration (corpus layout, split, alphas)
#   - model.json: Trained model (in data directory)
# =============================================================================

import math
import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w  # For writing TOML (tomllib is read-only)

from sms_sieve.corpus import CorpusError, check_split_ratios
from sms_sieve.spam.tokenizer import TokenizerConfig


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used in all XDG paths
APP_NAME = "sms-sieve"


def get_xdg_config_home() -> Path:
    """
    Returns the XDG config directory for SMS Sieve.

    Respects $XDG_CONFIG_HOME if set, otherwise uses ~/.config/sms-sieve/
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / APP_NAME


def get_xdg_data_home() -> Path:
    """
    Returns the XDG data directory for SMS Sieve.

    Respects $XDG_DATA_HOME if set, otherwise uses ~/.local/share/sms-sieve/
    This is where trained models live.
    """
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        base = Path(xdg_data)
    else:
        base = Path.home() / ".local" / "share"
    return base / APP_NAME


# =============================================================================
# Configuration Data Structures
# =============================================================================

@dataclass
class CorpusConfig:
    """
    Layout of the corpus file.

    Attributes:
        path: Corpus file. Empty means it must be given on the command line.
        label_column: Header name of the label column.
        text_column: Header name of the message text column.
        separator: Field delimiter ("\\t" for the SMS Spam Collection).
        has_header: Whether the first row holds column names.
        encoding: File encoding.
    """
    path: str = ""
    label_column: str = "Label"
    text_column: str = "SMS"
    separator: str = "\t"
    has_header: bool = True
    encoding: str = "utf-8"


@dataclass
class SplitConfig:
    """
    Train / validation / test proportions.

    Ratios must each be in (0, 1) and add up to 1.
    """
    train_ratio: float = 0.8
    validation_ratio: float = 0.1
    test_ratio: float = 0.1
    seed: int = 1                       # Same seed, same split


@dataclass
class ModelConfig:
    """
    Smoothing settings.

    Attributes:
        alpha: Alpha used by `classify` when none is given.
        alpha_candidates: Alphas tried by `sweep`.
        max_workers: Threads used by the sweep (1 = sequential).
    """
    alpha: float = 1.0
    alpha_candidates: list[float] = field(
        default_factory=lambda: [0.1, 0.25, 0.5, 0.75, 1.0]
    )
    max_workers: int = 1


@dataclass
class Config:
    """
    Main configuration container for SMS Sieve.

    Usage:
        >>> config = Config.load()
        >>> config.model.alpha_candidates
        [0.1, 0.25, 0.5, 0.75, 1.0]
    """
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    split: SplitConfig = field(default_factory=SplitConfig)
    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    model: ModelConfig = field(default_factory=ModelConfig)

    # -------------------------------------------------------------------------
    # File Paths
    # -------------------------------------------------------------------------

    @staticmethod
    def config_file_path() -> Path:
        """Returns the path to the main config file."""
        return get_xdg_config_home() / "config.toml"

    @staticmethod
    def model_path() -> Path:
        """Returns the default path of the trained model."""
        return get_xdg_data_home() / "model.json"

    # -------------------------------------------------------------------------
    # Loading and Saving
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from a config file.

        If the file doesn't exist, returns default configuration.

        Args:
            path: Config file. Uses the XDG location if None.

        Returns:
            Loaded Config object.

        Raises:
            ConfigError: If the config file exists but is invalid.
        """
        config_path = Path(path) if path else cls.config_file_path()

        if not config_path.exists():
            # No config file yet - return defaults
            return cls()

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file: {e}") from e

        config = cls._from_dict(data)
        config.validate()
        return config

    def save(self, path: Path | None = None) -> None:
        """
        Save configuration to a config file.

        Creates the config directory if it doesn't exist.
        """
        config_path = Path(path) if path else self.config_file_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(self._to_dict(), f)

    def validate(self) -> None:
        """
        Check values that would only blow up later in the pipeline.

        Raises:
            ConfigError: On the first invalid value found.
        """
        split = self.split
        try:
            check_split_ratios(split.train_ratio, split.validation_ratio, split.test_ratio)
        except CorpusError as e:
            raise ConfigError(f"Invalid [split] section: {e}") from e

        if not (math.isfinite(self.model.alpha) and self.model.alpha > 0):
            raise ConfigError(f"model.alpha must be positive, got {self.model.alpha}")
        if not self.model.alpha_candidates:
            raise ConfigError("model.alpha_candidates must not be empty")
        if self.model.max_workers < 1:
            raise ConfigError(f"model.max_workers must be at least 1, got {self.model.max_workers}")

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """
        Create a Config object from a dictionary (parsed TOML).

        Missing keys fall back to defaults; values of the wrong type
        raise ConfigError.
        """
        config = cls()

        try:
            # Corpus settings
            corpus = data.get("corpus", {})
            config.corpus = CorpusConfig(
                path=str(corpus.get("path", "")),
                label_column=str(corpus.get("label_column", "Label")),
                text_column=str(corpus.get("text_column", "SMS")),
                separator=str(corpus.get("separator", "\t")),
                has_header=_get_bool(corpus, "has_header", True),
                encoding=str(corpus.get("encoding", "utf-8")),
            )

            # Split settings
            split = data.get("split", {})
            config.split = SplitConfig(
                train_ratio=float(split.get("train_ratio", 0.8)),
                validation_ratio=float(split.get("validation_ratio", 0.1)),
                test_ratio=float(split.get("test_ratio", 0.1)),
                seed=int(split.get("seed", 1)),
            )

            # Tokenizer settings
            tokenizer = data.get("tokenizer", {})
            config.tokenizer = TokenizerConfig(
                min_token_length=int(tokenizer.get("min_token_length", 1)),
                dictionary_path=str(tokenizer.get("dictionary_path", "")),
            )

            # Model settings
            model = data.get("model", {})
            config.model = ModelConfig(
                alpha=float(model.get("alpha", 1.0)),
                alpha_candidates=[
                    float(a) for a in model.get("alpha_candidates", [0.1, 0.25, 0.5, 0.75, 1.0])
                ],
                max_workers=int(model.get("max_workers", 1)),
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid config value: {e}") from e

        return config

    def _to_dict(self) -> dict[str, Any]:
        """
        Convert Config to a dictionary for TOML serialization.
        """
        return {
            "corpus": {
                "path": self.corpus.path,
                "label_column": self.corpus.label_column,
                "text_column": self.corpus.text_column,
                "separator": self.corpus.separator,
                "has_header": self.corpus.has_header,
                "encoding": self.corpus.encoding,
            },
            "split": {
                "train_ratio": self.split.train_ratio,
                "validation_ratio": self.split.validation_ratio,
                "test_ratio": self.split.test_ratio,
                "seed": self.split.seed,
            },
            "tokenizer": {
                "min_token_length": self.tokenizer.min_token_length,
                "dictionary_path": self.tokenizer.dictionary_path,
            },
            "model": {
                "alpha": self.model.alpha,
                "alpha_candidates": list(self.model.alpha_candidates),
                "max_workers": self.model.max_workers,
            },
        }


def _get_bool(section: dict[str, Any], key: str, default: bool) -> bool:
    """
    Read a TOML boolean.

    Strings such as "false" are rejected, not coerced.
    """
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(Exception):
    """Raised when there's an error loading or parsing configuration."""
    pass


# =============================================================================
# Utility Functions
# =============================================================================

def print_paths() -> None:
    """
    Print all XDG paths for debugging.
    Useful for users wondering where their config/model is stored.
    """
    print(f"Config:  {get_xdg_config_home()}")
    print(f"Data:    {get_xdg_data_home()}")
    print()
    print(f"Config file:  {Config.config_file_path()}")
    print(f"Model:        {Config.model_path()}")
