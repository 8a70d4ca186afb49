"""Code generators from syntax trees to XSM machine code."""

__version__ = "0.1.0"