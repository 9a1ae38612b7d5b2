"""
Configuration for the node resolver.

Settings are read from the environment. load_settings() first loads
.env.local and then .env (values already set win), mirroring how the
scripts of this project are run.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

DEFAULT_CANONICAL_HOST = "http://localhost"
DEFAULT_LANGUAGE = "en-US"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


@dataclass
class ResolverSettings:
    """Site-wide values used to build a ResolutionContext."""
    canonical_host: str = DEFAULT_CANONICAL_HOST
    canonical_url: Optional[str] = None
    default_language: str = DEFAULT_LANGUAGE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "ResolverSettings":
        """Read settings from SCHEMA_GRAPH_* environment variables."""
        return cls(
            canonical_host=os.getenv("SCHEMA_GRAPH_CANONICAL_HOST", DEFAULT_CANONICAL_HOST),
            canonical_url=os.getenv("SCHEMA_GRAPH_CANONICAL_URL") or None,
            default_language=os.getenv("SCHEMA_GRAPH_DEFAULT_LANGUAGE", DEFAULT_LANGUAGE),
            log_level=os.getenv("SCHEMA_GRAPH_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )


def load_settings(env_file: Optional[Union[str, Path]] = None) -> ResolverSettings:
    """
    Load environment files and return the resulting settings.

    Args:
        env_file: Explicit env file to load. When omitted, .env.local and
            .env in the current working directory are tried in that order.

    Returns:
        ResolverSettings populated from the environment
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        project_root = Path.cwd()
        load_dotenv(project_root / ".env.local")
        load_dotenv(project_root / ".env")

    settings = ResolverSettings.from_env()
    logger.debug(f"Loaded resolver settings for host {settings.canonical_host}")
    return settings


def configure_logging(level: Union[str, int] = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging with the project format."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
