"""
Entry point for running vimflow as a module.

Usage:
    python -m vimflow list
    python -m vimflow watch 1
    python -m vimflow --help
"""
from .cli import run

if __name__ == "__main__":
    run()
