"""
orderflow command-line interface.
"""

from orderflow.cli.main import main

__all__ = ["main"]
