"""Masal: personalized, illustrated and narrated children's stories."""

__version__ = "0.1.0"
