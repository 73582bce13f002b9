"""
Configuration Manager for epubsmith

Handles user configuration using INI format for ease of use.
Provides defaults for all settings.
"""

import configparser
import logging
from pathlib import Path
from typing import Any, Optional, Union

from epubsmith.utils.errors import ConfigError

logger = logging.getLogger("epubsmith.config")

DEFAULT_CONFIG_NAME = "epubsmith.ini"

TEMPLATE = """# epubsmith Configuration File
#
# Lines starting with # are comments and are ignored.
# To change a setting, remove the # at the beginning of the line and modify the value.

[Package]
# EPUB version written to the package document
version = 3.0

# Heading and <title> of the generated table of contents
nav_title = Table of Contents

# Compress archive members (the mimetype entry is always stored uncompressed)
compress = true

[Processing]
# Enable debug output for troubleshooting
debug = false
"""


class ConfigManager:
    """Manages configuration settings for epubsmith"""

    DEFAULT_CONFIG = {
        'Package': {
            'version': '3.0',
            'nav_title': 'Table of Contents',
            'compress': 'true',
        },
        'Processing': {
            'debug': 'false',
        },
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager

        Args:
            config_path: Path to configuration file. If None, looks for epubsmith.ini
                         in current directory, then uses defaults.
        """
        self.config = configparser.ConfigParser()

        for section, options in self.DEFAULT_CONFIG.items():
            self.config[section] = options

        self.config_path = Path(config_path or DEFAULT_CONFIG_NAME)

        if self.config_path.exists():
            try:
                self.config.read(self.config_path, encoding='utf-8')
            except configparser.Error as e:
                raise ConfigError(f"Failed to parse config file {self.config_path}: {e}") from e
            logger.debug(f"Loaded configuration from: {self.config_path}")
        else:
            logger.debug(f"No configuration file found at {self.config_path}, using defaults")

    def get(self, section: str, option: str, fallback: Any = None) -> Any:
        return self.config.get(section, option, fallback=fallback)

    def getboolean(self, section: str, option: str, fallback: bool = False) -> bool:
        try:
            return self.config.getboolean(section, option, fallback=fallback)
        except ValueError as e:
            raise ConfigError(f"[{section}] {option}: {e}") from e

    @property
    def epub_version(self) -> str:
        return self.get('Package', 'version', '3.0')

    @property
    def nav_title(self) -> str:
        return self.get('Package', 'nav_title', 'Table of Contents')

    @property
    def compress(self) -> bool:
        return self.getboolean('Package', 'compress', True)

    @property
    def debug(self) -> bool:
        """Check if debug mode is enabled"""
        return self.getboolean('Processing', 'debug', False)


def write_template(path: Union[str, Path] = DEFAULT_CONFIG_NAME, overwrite: bool = False) -> Path:
    """Writes a commented configuration template. Refuses to clobber an existing file."""
    target = Path(path)
    if target.exists() and not overwrite:
        raise ConfigError(f"Refusing to overwrite existing config file: {target}")
    target.write_text(TEMPLATE, encoding='utf-8')
    return target
