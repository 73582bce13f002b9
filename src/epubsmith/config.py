from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass
from typing import Optional

from epubsmith.config_manager import ConfigManager
from epubsmith.utils.errors import ConfigError

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class FormatConfig:
    """
    Fixed names and version tokens of the target container format.
    Passed into the builder explicitly so different targets can coexist.
    """
    version: str = "3.0"
    mimetype: str = "application/epub+zip"
    content_dir: str = "OEBPS"
    package_file: str = "content.opf"
    nav_file: str = "nav.xhtml"
    container_path: str = "META-INF/container.xml"

    @property
    def package_path(self) -> str:
        return posixpath.join(self.content_dir, self.package_file)


@dataclass(frozen=True)
class PackageConfig:
    version: str = "3.0"
    nav_title: str = "Table of Contents"
    compress: bool = True


@dataclass(frozen=True)
class ProcessingConfig:
    debug: bool = False


@dataclass(frozen=True)
class AppConfig:
    """
    Root typed configuration passed across CLI -> pipeline -> builder.
    All env reads are centralized here; library code receives sub-configs explicitly.
    """
    package: PackageConfig
    processing: ProcessingConfig

    @staticmethod
    def _get_env_str(name: str, default: Optional[str] = None) -> Optional[str]:
        v = os.getenv(name)
        if v is None or v == "":
            return default
        return v

    @classmethod
    def _get_env_bool(cls, name: str, default: bool) -> bool:
        v = cls._get_env_str(name)
        if v is None:
            return default
        if v.lower() in _TRUE:
            return True
        if v.lower() in _FALSE:
            return False
        raise ConfigError(f"{name} must be a boolean, got {v!r}")

    @classmethod
    def from_env_and_ini(cls, ini_path: Optional[str]) -> "AppConfig":
        """
        Build AppConfig from environment variables (already loaded by CLI via load_dotenv())
        and INI defaults via ConfigManager.

        Precedence (highest -> lowest):
        - CLI (handled in cli.py)
        - Environment (EPUBSMITH_*)
        - INI via ConfigManager
        - Hardcoded defaults
        """
        cfg = ConfigManager(ini_path)

        version = cls._get_env_str("EPUBSMITH_EPUB_VERSION") or cfg.epub_version
        if not version.startswith("3."):
            raise ConfigError(f"Only EPUB 3 packages are supported, got version {version!r}")

        package = PackageConfig(
            version=version,
            nav_title=cls._get_env_str("EPUBSMITH_NAV_TITLE") or cfg.nav_title,
            compress=cfg.compress,
        )
        processing = ProcessingConfig(
            debug=cls._get_env_bool("EPUBSMITH_DEBUG", cfg.debug),
        )
        return cls(package=package, processing=processing)

    def format_config(self) -> FormatConfig:
        return FormatConfig(version=self.package.version)
