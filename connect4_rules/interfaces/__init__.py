"""
connect4_rules.interfaces - User interfaces for Connect Four
"""

from connect4_rules.interfaces.cli import SimpleCLI

__all__ = ['SimpleCLI']
