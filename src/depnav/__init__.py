"""depnav: interactive exploration of Python package dependency graphs."""

__version__ = "0.1.0"
