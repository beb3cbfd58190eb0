"""Local mirroring of a remote tree."""

from tfsgit.mirror.context import WalkContext
from tfsgit.mirror.materializer import FileMaterializer
from tfsgit.mirror.walker import TreeWalker

__all__ = ["FileMaterializer", "TreeWalker", "WalkContext"]
