"""In-place sorting, a growable vector, and a buffered reader for local files and URLs."""

__version__ = "0.1.0"

__all__ = ["cli", "reader", "s3", "sorting", "vector"]