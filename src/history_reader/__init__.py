"""History Reader: random Japanese history articles from Wikipedia."""

__version__ = "0.1.0"
