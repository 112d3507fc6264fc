"""kingside: chess rules, game sessions and a negamax opponent."""

__version__ = "0.1.0"
