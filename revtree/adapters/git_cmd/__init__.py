"""Git command-line adapter."""

from revtree.adapters.git_cmd.git_adapter import GitAdapter

__all__ = ["GitAdapter"]
