"""Report the number of processing units available to the current process."""

__version__ = "0.1"
