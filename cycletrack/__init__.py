"""CycleTrack: personal finance tracking over 11+3 day work cycles."""

__version__ = "0.1.0"
