"""Entry point for ``python -m finddups``."""

from .cli.app import app


def main() -> None:
    """Run the CLI application."""
    app(prog_name="finddups")


if __name__ == "__main__":
    main()
