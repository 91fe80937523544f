"""Entry point for running ttsgate as a module."""

from .cli import app


def main() -> None:
    """Main entry point for the ttsgate CLI application."""
    app()


if __name__ == "__main__":
    main()
