"""Season recap insight engine for League of Legends match history."""

__version__ = "0.1.0"
