"""springs — count damaged-spring arrangements for condition records."""

__version__ = "0.1.0"
