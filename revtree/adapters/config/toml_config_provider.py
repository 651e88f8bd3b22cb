"""TOML-based configuration provider.

Config loading priority (highest to lowest):
1. Local: .revtree.toml in the project directory
2. Global: ~/.config/revtree/config.toml (user defaults)
3. Built-in defaults
"""

import logging
from pathlib import Path

from revtree.domain.config import RevtreeConfig
from revtree.shared.config_io import (
    get_global_config_path,
    get_local_config_path,
    load_config_data,
)

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider that loads from TOML files.

    Local values override global values key by key; missing values fall back
    to built-in defaults. Missing or invalid files are logged and skipped.
    """

    def load(self, project_dir: Path) -> RevtreeConfig:
        """Load configuration with global fallback.

        Args:
            project_dir: Directory that may hold a .revtree.toml

        Returns:
            RevtreeConfig with merged global/local values or defaults
        """
        config = RevtreeConfig.default()

        global_path = get_global_config_path()
        if global_path.exists():
            try:
                config = RevtreeConfig.from_partial(config, load_config_data(global_path))
                logger.debug("Loaded global config from %s", global_path)
            except (FileNotFoundError, ValueError) as e:
                logger.warning(
                    "Failed to parse global config at %s: %s. Ignoring global config.",
                    global_path,
                    e,
                )

        local_path = get_local_config_path(project_dir)
        if local_path.exists():
            try:
                config = RevtreeConfig.from_partial(config, load_config_data(local_path))
                logger.debug("Loaded local config from %s", local_path)
            except (FileNotFoundError, ValueError) as e:
                logger.warning(
                    "Failed to parse %s: %s. Using global/default configuration.",
                    local_path,
                    e,
                )

        return config
