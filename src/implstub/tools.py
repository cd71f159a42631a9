"""Discovery and invocation of the external Go tools."""

import logging
import os
import shutil
import subprocess
from pathlib import Path

from implstub.config import ImplConfig
from implstub.errors import ToolExecutionError, ToolNotFoundError

logger = logging.getLogger(__name__)

# Install commands shown when a tool is missing
TOOL_INSTALL_PATHS = {
    "impl": "github.com/josharian/impl@latest",
}


def get_tools_env_vars(config: ImplConfig | None = None) -> dict[str, str]:
    """Return the environment the tools run with.

    A copy of the current environment, with GOPATH replaced when the config
    overrides it.
    """
    config = config or ImplConfig()
    env = dict(os.environ)
    if config.gopath:
        env["GOPATH"] = config.gopath
    return env


def _gopath_entries(env: dict[str, str]) -> list[Path]:
    gopath = env.get("GOPATH")
    if not gopath:
        return [Path.home() / "go"]
    return [Path(p) for p in gopath.split(os.pathsep) if p]


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def get_bin_path(tool: str, config: ImplConfig | None = None) -> str:
    """Resolve the executable path of a Go tool.

    Lookup order:
    - an absolute path given in config.tool (when tool is the configured name)
    - $GOBIN/<tool>
    - <each GOPATH entry>/bin/<tool>
    - <tool> on PATH

    Args:
        tool: Tool name, e.g. "impl"
        config: Configuration supplying tool path and GOPATH overrides

    Returns:
        Path to the executable, or the bare tool name if nothing was found so
        that running it reports the tool as missing.
    """
    config = config or ImplConfig()
    if Path(config.tool).is_absolute() and Path(config.tool).name == tool:
        return config.tool

    env = get_tools_env_vars(config)
    candidates = []
    if env.get("GOBIN"):
        candidates.append(Path(env["GOBIN"]) / tool)
    candidates.extend(entry / "bin" / tool for entry in _gopath_entries(env))

    for candidate in candidates:
        if _is_executable(candidate):
            return str(candidate)

    found = shutil.which(tool)
    if found:
        return found

    return tool


def missing_tool_message(tool: str) -> str:
    """Describe how to install a missing tool."""
    install_path = TOOL_INSTALL_PATHS.get(tool)
    if install_path is None:
        return f"The \"{tool}\" command is not available."
    return (
        f"The \"{tool}\" command is not available. "
        f"Install it with: go install {install_path}"
    )


def run_impl(args: list[str], cwd: Path | None = None, config: ImplConfig | None = None) -> str:
    """Run the stub generator and return the generated source.

    Args:
        args: Exactly two arguments, [recvSpec, interfaceType]
        cwd: Directory to run in, so package-relative interfaces resolve
        config: Tool configuration

    Returns:
        The tool's stdout, verbatim

    Raises:
        ToolNotFoundError: If the tool binary can't be found
        ToolExecutionError: If the tool fails or times out
    """
    config = config or ImplConfig()
    tool_name = Path(config.tool).name
    binary = get_bin_path(tool_name, config)
    logger.debug(f"Running {binary} {args} in {cwd}")

    try:
        result = subprocess.run(
            [binary, *args],
            capture_output=True,
            text=True,
            check=True,
            stdin=subprocess.DEVNULL,
            cwd=cwd,
            env=get_tools_env_vars(config),
            timeout=config.timeout,
        )
    except FileNotFoundError:
        raise ToolNotFoundError(tool_name)
    except subprocess.CalledProcessError as e:
        error_msg = e.stderr.strip() if e.stderr else str(e)
        raise ToolExecutionError(error_msg, e.returncode)
    except subprocess.TimeoutExpired:
        raise ToolExecutionError(f"{tool_name} timed out after {config.timeout} seconds")

    return result.stdout
