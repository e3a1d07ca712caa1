"""clubcal - club and social event calendar."""

__version__ = "0.1.0"
