"""notedoc - generate documentation for Jupyter notebooks through a remote service."""

__version__ = "0.1.0"
