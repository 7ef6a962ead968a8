"""Terminal chess with algebraic notation and an optional Stockfish opponent."""

__version__ = "1.0.0"
__all__ = ["__version__"]