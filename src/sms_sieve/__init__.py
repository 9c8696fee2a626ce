# =============================================================================
# SMS Sieve: Naive Bayes Spam Filtering for Text Messages
# =============================================================================
#
# SMS Sieve learns to tell spam from ham on a labeled corpus of short
# messages, using a bag-of-words Naive Bayes model with Laplace smoothing.
#
# Features:
#   - Stratified train / validation / test splits of a CSV/TSV corpus
#   - Immutable, thread-safe trained models (JSON save/load)
#   - Smoothing constant picked by held-out accuracy, optionally in parallel
#   - Confusion matrix and accuracy reports
#   - XDG Base Directory compliant
#
# =============================================================================

__version__ = "0.1.0"
__app_name__ = "sms-sieve"

# Main entry point - this is what gets called by the 'sms-sieve' command
from sms_sieve.cli import main

__all__ = ["main", "__version__", "__app_name__"]
