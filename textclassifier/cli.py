"""textclassifier CLI - inspect and run trained classifiers from the shell.

Commands:
    labels PATH            Show the classifier type and label list
    classify PATH [TEXT]   Classify texts (or stdin lines)
    check PATH             Resolve a model and report whether it is stale
"""

import argparse
import json
import logging
import sys
from typing import NoReturn

import numpy as np
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from textclassifier import __version__
from textclassifier.classifiers import TextClassifier
from textclassifier.errors import TextClassifierError
from textclassifier.resolver import resolve

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbose: If True, set DEBUG level; otherwise WARNING.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def _read_texts(args: argparse.Namespace) -> list[str]:
    if args.text:
        return list(args.text)
    return [line.rstrip("\n") for line in sys.stdin if line.strip()]


def _format_scores(classifier: TextClassifier, scores: np.ndarray) -> str:
    return ", ".join(f"{label}={score:.3f}" for label, score in zip(classifier.labels, scores))


def cmd_labels(args: argparse.Namespace) -> int:
    """Show the classifier type and labels of a model."""
    classifier = resolve(args.path)

    table = Table(title=f"{classifier.lexicon.classifier_type} classifier")
    table.add_column("Index", justify="right")
    table.add_column("Label", style="bold")
    for index, label in enumerate(classifier.labels):
        table.add_row(str(index), label)

    console.print(table)
    console.print(
        f"[dim]{classifier.lexicon.vocabulary_size} tokens, {classifier.resource_dir}[/dim]"
    )
    return 0


def cmd_classify(args: argparse.Namespace) -> int:
    """Classify texts and print the selected labels."""
    classifier = resolve(args.path)
    texts = _read_texts(args)
    documents = [classifier.create_document_from_text(text) for text in texts]
    scores = classifier.classify_batch(documents)

    rows = []
    for text, row in zip(texts, scores):
        if args.ratio is not None:
            labels = classifier.best_labels(row, args.ratio)
        else:
            labels = [classifier.best_label(row)]
        rows.append((text, labels, row))

    if args.json:
        payload = [
            {"text": text, "labels": labels, "scores": dict(zip(classifier.labels, row.tolist()))}
            for text, labels, row in rows
        ]
        console.print_json(json.dumps(payload))
        return 0

    table = Table(title="Classification")
    table.add_column("Text", overflow="fold")
    table.add_column("Labels", style="bold green")
    table.add_column("Scores", style="dim")
    for text, labels, row in rows:
        table.add_row(escape(text), ", ".join(labels), _format_scores(classifier, row))
    console.print(table)
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Resolve a model and report freshness."""
    classifier = resolve(args.path)
    stale = classifier.needs_refreshing()
    status = "[yellow]stale[/yellow]" if stale else "[green]fresh[/green]"
    console.print(
        Panel(
            f"Type: {classifier.lexicon.classifier_type}\n"
            f"Labels: {classifier.lexicon.label_count}\n"
            f"Directory: {classifier.resource_dir}\n"
            f"Status: {status}",
            title="Model Check",
        )
    )
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="textclassifier",
        description="Resolve trained text classifiers and label documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  textclassifier labels models/news
  textclassifier classify models/news "Late goal wins the cup"
  textclassifier classify models/news.zip --ratio 0.8 --json < texts.txt
  textclassifier check models/news
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    labels_parser = subparsers.add_parser("labels", help="List labels of a model")
    labels_parser.add_argument("path", help="Resource directory or archive")
    labels_parser.set_defaults(func=cmd_labels)

    classify_parser = subparsers.add_parser("classify", help="Classify texts")
    classify_parser.add_argument("path", help="Resource directory or archive")
    classify_parser.add_argument("text", nargs="*", help="Texts to classify (default: stdin lines)")
    classify_parser.add_argument(
        "--ratio",
        type=float,
        default=None,
        help="Return every label within this ratio of the best (0 < r <= 1)",
    )
    classify_parser.add_argument("--json", action="store_true", help="Print JSON output")
    classify_parser.set_defaults(func=cmd_classify)

    check_parser = subparsers.add_parser("check", help="Check whether a model is stale")
    check_parser.add_argument("path", help="Resource directory or archive")
    check_parser.set_defaults(func=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        result: int = args.func(args)
    except TextClassifierError as e:
        console.print(f"[red]{e.__class__.__name__}: {escape(e.message)}[/red]")
        logger.debug("Command failed: %r", e)
        return 1
    return result


def run() -> NoReturn:
    """Entry point that handles interrupts and exit codes."""
    try:
        exit_code = main()
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted.[/dim]")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    run()
