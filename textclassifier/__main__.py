"""Entry point for python -m textclassifier execution.

    python -m textclassifier labels models/news
    python -m textclassifier --help
"""

from textclassifier.cli import run

if __name__ == "__main__":
    run()
