"""edgeform — schema-driven configuration models for edge controller resources."""

__version__ = "0.1.0"
