from importlib.metadata import PackageNotFoundError, version as _dist_version

try:
    __version__: str = _dist_version("clawmark")
except PackageNotFoundError:
    # running from a source checkout without an install
    __version__ = "0.0.0"

__all__ = ["__version__"]
