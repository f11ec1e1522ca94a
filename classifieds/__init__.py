"""Data-access objects for the classifieds marketplace."""

__version__ = "0.1.0"
