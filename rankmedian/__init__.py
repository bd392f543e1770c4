"""rankmedian: exact consensus rankings for small expert panels."""

__version__ = "0.1.0"
