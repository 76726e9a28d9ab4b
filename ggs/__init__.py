"""ggs — find git repositories with uncommitted or unpushed work."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ggs")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
