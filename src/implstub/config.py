"""Configuration management for implstub."""

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from implstub.scanner import DEFAULT_BOUNDARIES

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".implstub"


@dataclass
class ImplConfig:
    """Configuration for stub generation.

    Attributes:
        boundaries: Characters that delimit the word under the cursor.
        tool: Name of the stub generator binary, or an absolute path to it.
        gopath: GOPATH override used for tool lookup and the tool environment.
            None keeps the inherited environment.
        timeout: Seconds to wait for the tool before giving up.
    """
    boundaries: str = DEFAULT_BOUNDARIES
    tool: str = "impl"
    gopath: str | None = None
    timeout: float = 30.0


def load_impl_config(root: Path | None = None) -> ImplConfig:
    """Load configuration from the .implstub file in root.

    Args:
        root: Directory holding the config file. If None, uses current directory.

    Returns:
        ImplConfig object with loaded or default values.

    Notes:
        If .implstub doesn't exist or can't be parsed, returns default config.
        Expected YAML structure:

        ```yaml
        impl:
          boundaries: "\\t "
          tool: impl
          gopath: /home/me/go
          timeout: 30
        ```
    """
    if root is None:
        root = Path.cwd()

    config_path = root / CONFIG_FILE_NAME

    if not config_path.exists():
        return ImplConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            return ImplConfig()

        impl_config = data.get("impl", {})
        if not isinstance(impl_config, dict):
            return ImplConfig()

        boundaries = impl_config.get("boundaries", ImplConfig.boundaries)
        if not isinstance(boundaries, str) or not boundaries:
            raise ValueError(f"boundaries must be a non-empty string, got {boundaries!r}")

        tool = impl_config.get("tool", ImplConfig.tool)
        if not isinstance(tool, str) or not tool:
            raise ValueError(f"tool must be a non-empty string, got {tool!r}")

        gopath = impl_config.get("gopath", ImplConfig.gopath)
        if gopath is not None and not isinstance(gopath, str):
            raise ValueError(f"gopath must be a string, got {gopath!r}")

        return ImplConfig(
            boundaries=boundaries,
            tool=tool,
            gopath=gopath,
            timeout=float(impl_config.get("timeout", ImplConfig.timeout)),
        )
    except (yaml.YAMLError, OSError, KeyError, TypeError, ValueError) as e:
        logger.warning(f"Ignoring invalid config {config_path}: {e}")
        return ImplConfig()
