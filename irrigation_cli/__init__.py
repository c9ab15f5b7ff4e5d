"""
Irrigation Planner CLI - command-line interface for plan files.
"""

from .cli import main

__all__ = ["main"]
