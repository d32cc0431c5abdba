"""Message queue and transmission state machine for a six-shutter clacks tower."""

__version__ = "0.1.0"
