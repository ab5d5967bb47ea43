"""
HandOdds: Texas Hold'em hand probability explorer

Classifies the hand you hold now, estimates by Monte Carlo simulation
what it may become once the board is complete, and suggests a simple
heuristic betting action.
"""

__version__ = "0.1.0"
