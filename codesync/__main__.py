"""
Main entry point for the codesync CLI.
"""

from codesync.cli import cli


def main() -> None:
    """Main function for the codesync CLI."""
    cli()


if __name__ == "__main__":
    main()
