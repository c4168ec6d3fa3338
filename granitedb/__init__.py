"""Building blocks for a document-oriented database engine and its CLI client."""

__version__ = "0.1.0"