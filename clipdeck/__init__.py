"""ClipDeck - browse, filter, and play highlight clips from a clip database."""

__version__ = "0.1.0"
