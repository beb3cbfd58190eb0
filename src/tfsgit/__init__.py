"""tfsgit: mirror a TFS Git repository subtree onto the local filesystem."""

__version__ = "0.1.0"
