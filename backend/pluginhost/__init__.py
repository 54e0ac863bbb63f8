__all__ = ["__version__"]

# Version comes from installed distribution metadata; a bare source checkout
# reports a local dev version.
from importlib.metadata import version, PackageNotFoundError

try:
	__version__ = version("pluginhost")
except PackageNotFoundError:
	__version__ = "0.0.0+local"
