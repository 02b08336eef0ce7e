"""themecascade - cascading hook preprocessing for render variables."""

__version__ = "0.1.0"
