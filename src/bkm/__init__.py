"""bkm - command-line bookmark manager."""

__version__ = "0.1.0"
