"""Task Board - server-rendered task manager with progressive enhancement"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("task-board")
except PackageNotFoundError:
    __version__ = "dev"
