"""MongoDB specific process finder."""

__version__ = "0.2.2"
