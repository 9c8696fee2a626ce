# =============================================================================
# Spam Module
# =============================================================================
# Naive Bayes spam filtering for short text messages.
#
# The pipeline, leaves first:
#   - Tokenizer: raw text -> normalized tokens
#   - Vocabulary: the sorted set of tokens the model knows
#   - FrequencyTable: per-class token counts
#   - NaiveBayesModel: priors + counts -> spam/ham decision for a given alpha
#   - sweep_alpha: pick alpha by accuracy on a held-out set
#
# Everything built from training data is immutable. Alpha is passed per
# call, so trying a new alpha never means retraining.
# =============================================================================

from sms_sieve.spam.classifier import (
    ClassPriors,
    NaiveBayesModel,
    check_alpha,
    classify,
    load_model,
    save_model,
    train_model,
)
from sms_sieve.spam.frequency import FrequencyTable, build_frequency_table
from sms_sieve.spam.labels import (
    InvalidInputError,
    InvalidParameterError,
    Label,
    LabeledMessage,
    SpamFilterError,
)
from sms_sieve.spam.selection import (
    EvaluationReport,
    SweepResult,
    evaluate,
    predict,
    sweep_alpha,
)
from sms_sieve.spam.tokenizer import Tokenizer, TokenizerConfig
from sms_sieve.spam.vocabulary import Vocabulary, build_vocabulary

__all__ = [
    "ClassPriors",
    "EvaluationReport",
    "FrequencyTable",
    "InvalidInputError",
    "InvalidParameterError",
    "Label",
    "LabeledMessage",
    "NaiveBayesModel",
    "SpamFilterError",
    "SweepResult",
    "Tokenizer",
    "TokenizerConfig",
    "Vocabulary",
    "build_frequency_table",
    "build_vocabulary",
    "check_alpha",
    "classify",
    "evaluate",
    "load_model",
    "predict",
    "save_model",
    "sweep_alpha",
    "train_model",
]
