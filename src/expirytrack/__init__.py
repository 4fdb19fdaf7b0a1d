"""expirytrack package metadata."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("expirytrack")
except PackageNotFoundError:
    __version__ = "0.1.0"
