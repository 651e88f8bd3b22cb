"""Config domain models for revtree.

Configuration is read from a global config.toml and a project-local
.revtree.toml. This module defines the validated configuration state.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Literal

TagSelection = Literal["latest", "earliest"]


@dataclass(frozen=True)
class GitConfig:
    """Configuration for the git client.

    Attributes:
        executable: git binary to run (name on PATH or absolute path)
        verify_remote: Ping the origin remote when opening a local repository

    Raises:
        ValueError: If executable is empty or verify_remote is not a boolean.
    """

    executable: str = "git"
    verify_remote: bool = True

    def __post_init__(self) -> None:
        """Validate git config after initialization."""
        if not isinstance(self.executable, str) or not self.executable.strip():
            raise ValueError("executable must be a non-empty string")
        if not isinstance(self.verify_remote, bool):
            raise ValueError(
                f"verify_remote must be a boolean, got {self.verify_remote!r}"
            )


@dataclass(frozen=True)
class CloneConfig:
    """Configuration for cloning remote repositories.

    Attributes:
        temp_prefix: Prefix of the temporary directory a remote is cloned into

    Raises:
        ValueError: If temp_prefix contains a path separator.
    """

    temp_prefix: str = "revtree"

    def __post_init__(self) -> None:
        """Validate clone config after initialization."""
        if not isinstance(self.temp_prefix, str):
            raise ValueError(f"temp_prefix must be a string, got {self.temp_prefix!r}")
        if "/" in self.temp_prefix or "\\" in self.temp_prefix:
            raise ValueError(
                f"temp_prefix must not contain path separators, got {self.temp_prefix!r}"
            )


@dataclass(frozen=True)
class TagConfig:
    """Configuration for picking the baseline tag.

    Attributes:
        select: "latest" picks the highest semver tag, "earliest" the lowest

    Raises:
        ValueError: If select is not a known selection.
    """

    select: TagSelection = "latest"

    def __post_init__(self) -> None:
        """Validate tag config after initialization."""
        if self.select not in ("latest", "earliest"):
            raise ValueError(
                f"select must be 'latest' or 'earliest', got {self.select!r}"
            )


@dataclass(frozen=True)
class RevtreeConfig:
    """Complete revtree configuration.

    Attributes:
        git: Git client configuration
        clone: Remote clone configuration
        tags: Baseline tag selection
    """

    git: GitConfig = field(default_factory=GitConfig)
    clone: CloneConfig = field(default_factory=CloneConfig)
    tags: TagConfig = field(default_factory=TagConfig)

    @staticmethod
    def default() -> "RevtreeConfig":
        """Create a config with all default values."""
        return RevtreeConfig(git=GitConfig(), clone=CloneConfig(), tags=TagConfig())

    @staticmethod
    def from_partial(base: "RevtreeConfig", data: dict[str, Any]) -> "RevtreeConfig":
        """Overlay raw config data onto an existing config.

        Keys present in a section of data replace the base values for that
        key; everything else is kept. Each section is re-validated.

        Args:
            base: Config to start from
            data: Parsed TOML data (section name -> mapping)

        Returns:
            New RevtreeConfig with the overrides applied

        Raises:
            ValueError: If a section is malformed, has unknown keys, or fails
                validation.
        """
        updates: dict[str, Any] = {}
        for section in fields(base):
            section_data = data.get(section.name)
            if section_data is None:
                continue
            if not isinstance(section_data, dict):
                raise ValueError(f"[{section.name}] must be a table")

            current = getattr(base, section.name)
            known = {f.name for f in fields(current)}
            unknown = set(section_data) - known
            if unknown:
                raise ValueError(
                    f"Unknown keys in [{section.name}]: {', '.join(sorted(unknown))}"
                )
            try:
                updates[section.name] = replace(current, **section_data)
            except TypeError as e:
                raise ValueError(f"Invalid [{section.name}] section: {e}") from e

        return replace(base, **updates)
