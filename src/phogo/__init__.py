"""phogo - a terminal image browser."""

__version__ = "0.1.0"
