"""Version information for revtree.

Reads the package version from the installed distribution metadata
(pyproject.toml), so there is a single source of truth.
"""

from importlib.metadata import version

__version__ = version("revtree")
