# =============================================================================
# SMS Sieve Command Line
# =============================================================================
# Two commands:
#
#   sms-sieve sweep [CORPUS]        Train on a corpus, pick alpha on the
#                                   validation split, report test accuracy
#   sms-sieve classify MESSAGE...   Classify messages with a saved model
#
# Both read settings from config.toml (see sms_sieve.config); flags on the
# command line win over the file.
# =============================================================================

import argparse
import logging
import sys
from pathlib import Path

from sms_sieve import __app_name__, __version__
from sms_sieve.config import Config, ConfigError, print_paths
from sms_sieve.corpus import CorpusError, load_corpus, split_corpus, tokenize_corpus
from sms_sieve.report import confusion_matrix, format_confusion, format_report
from sms_sieve.spam import (
    NaiveBayesModel,
    SpamFilterError,
    Tokenizer,
    classify,
    load_model,
    predict,
    save_model,
    sweep_alpha,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Commands
# =============================================================================

def run_sweep(args: argparse.Namespace, config: Config) -> int:
    """
    Train, sweep alpha over the validation split, and evaluate on test.

    Returns:
        Exit code.
    """
    corpus_path = args.corpus or config.corpus.path
    if not corpus_path:
        logger.error("No corpus given (pass a path or set corpus.path in config.toml)")
        return 1

    raw = load_corpus(
        Path(corpus_path),
        label_column=config.corpus.label_column,
        text_column=config.corpus.text_column,
        separator=config.corpus.separator,
        has_header=config.corpus.has_header,
        encoding=config.corpus.encoding,
    )
    split = split_corpus(
        raw,
        train_ratio=config.split.train_ratio,
        validation_ratio=config.split.validation_ratio,
        test_ratio=config.split.test_ratio,
        seed=config.split.seed,
    )

    tokenizer = Tokenizer(config.tokenizer)
    train = tokenize_corpus(split.train, tokenizer)
    validation = tokenize_corpus(split.validation, tokenizer)
    test = tokenize_corpus(split.test, tokenizer)

    model = NaiveBayesModel.fit(train)

    alphas = args.alphas or config.model.alpha_candidates
    workers = args.workers or config.model.max_workers
    report = sweep_alpha(model, alphas, validation, max_workers=workers)

    print("Validation accuracy")
    print(format_report(report))

    best = report.best()
    if best is None:
        logger.error("Every alpha candidate failed")
        return 1

    predictions = predict(model, (m.tokens for m in test), best.alpha)
    matrix = confusion_matrix([m.label for m in test], predictions)

    print()
    print(f"Test set, alpha={best.alpha}")
    print(format_confusion(matrix))

    if args.save:
        save_model(model, args.save)
        print()
        print(f"Model saved to {args.save} (use --alpha {best.alpha} to classify)")

    return 0


def run_classify(args: argparse.Namespace, config: Config) -> int:
    """
    Classify messages given on the command line with a saved model.

    Prints one line per message: label, spam probability, text.

    Returns:
        Exit code.
    """
    model_path = args.model or Config.model_path()
    model = load_model(model_path)

    alpha = args.alpha if args.alpha is not None else config.model.alpha
    tokenizer = Tokenizer(config.tokenizer)

    for text in args.messages:
        tokens = tokenizer.tokenize(text)
        label = classify(model, tokens, alpha)
        probability = model.spam_probability(tokens, alpha)
        print(f"{label.value}\t{probability:.3f}\t{text}")

    return 0


# =============================================================================
# CLI Entry Point
# =============================================================================

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="SMS Sieve: Naive Bayes spam filtering for text messages",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--paths",
        action="store_true",
        help="Print configuration paths and exit",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: XDG config location)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    commands = parser.add_subparsers(dest="command")

    sweep = commands.add_parser(
        "sweep",
        help="Train on a corpus and pick alpha by validation accuracy",
    )
    sweep.add_argument(
        "corpus",
        nargs="?",
        type=Path,
        help="Corpus file (default: corpus.path from config)",
    )
    sweep.add_argument(
        "--alphas",
        type=float,
        nargs="+",
        help="Alpha candidates to try (default: model.alpha_candidates)",
    )
    sweep.add_argument(
        "--workers",
        type=int,
        help="Threads used for the sweep (default: model.max_workers)",
    )
    sweep.add_argument(
        "--save",
        type=Path,
        help="Save the trained model to this file",
    )

    classify_cmd = commands.add_parser(
        "classify",
        help="Classify messages with a saved model",
    )
    classify_cmd.add_argument(
        "messages",
        nargs="+",
        help="Message text(s) to classify",
    )
    classify_cmd.add_argument(
        "--model",
        type=Path,
        help="Model file (default: XDG data location)",
    )
    classify_cmd.add_argument(
        "--alpha",
        type=float,
        help="Smoothing constant (default: model.alpha from config)",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for SMS Sieve.

    This function:
        1. Parses command-line arguments
        2. Handles --paths
        3. Loads configuration
        4. Runs the requested command

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Handle --paths flag
    if args.paths:
        print_paths()
        return 0

    if args.command is None:
        print(f"{__app_name__}: no command given (try --help)", file=sys.stderr)
        return 2

    try:
        if args.config and not args.config.exists():
            raise ConfigError(f"Config file not found: {args.config}")
        config = Config.load(args.config)

        if args.command == "sweep":
            return run_sweep(args, config)
        return run_classify(args, config)
    except (ConfigError, CorpusError, SpamFilterError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
