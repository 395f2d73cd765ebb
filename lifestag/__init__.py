"""A terminal arcade game: dodge the time-stealing monsters and collect money."""

__version__ = "0.1.0"