"""CCSDS packet software bus with a time-sliced scheduler and UDP data link."""

__version__ = "0.1.0"