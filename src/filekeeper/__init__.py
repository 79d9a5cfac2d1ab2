"""filekeeper: track text files, their locations and categories in a local registry."""

__version__ = "0.1.0"
