"""
orderflow CLI - Command-line interface for the order service.

    orderflow demo --stock Phone=5 --order Phone:2
    orderflow config --file orderflow.yaml

This creates the 'orderflow' command via entry point in pyproject.toml.
"""


def main():
    """Main entry point for the orderflow CLI."""
    from orderflow.cli.app import cli

    cli()


if __name__ == "__main__":
    main()
