"""
Alea Output Module
===================

Console display for Alea results.
"""

from alea.output.console import AleaConsoleOutput

__all__ = ["AleaConsoleOutput"]
