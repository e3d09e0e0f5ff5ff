"""Factory floor layout engine — placement, clearances, collisions and distances."""

__version__ = "0.1.0"
