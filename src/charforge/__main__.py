"""CLI entry point for ``python -m charforge``."""

from charforge.main import run

if __name__ == "__main__":
    run()
