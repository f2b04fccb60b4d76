"""Moving sale catalog builder: CSV -> static catalog page, plus image compression."""

__version__ = "0.1.0"
