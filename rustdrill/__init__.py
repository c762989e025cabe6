"""Terminal trainer that compiles, runs and tracks progress through exercises."""

__version__ = "4.6.0"