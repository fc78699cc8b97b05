"""Allow ``python -m shirt_trades``."""

from shirt_trades import cli

if __name__ == "__main__":
    cli.app()
