"""
connect4_rules - Rules engine for two-player Connect Four

This package provides the board state machine, win detection around the
last move, turn processing for drivers, a Gymnasium environment and a
terminal interface.
"""

# Version number
__version__ = '0.1.0'
