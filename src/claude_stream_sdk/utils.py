"""Utility functions for claude-stream-sdk."""

import logging
import os
import platform
from collections.abc import Mapping, Sequence

from claude_stream_sdk.exceptions import CLINotFoundError

logger = logging.getLogger(__name__)

CLI_NAME = "claude"

# Explicit CLI location, checked before PATH
CLI_PATH_ENV_VAR = "CLAUDE_CLI_PATH"

_INSTALL_GUIDANCE = """\
Claude Code not found. It requires a JavaScript runtime, install one of:

* Node.js, then run: npm install -g @anthropic-ai/claude-code
* Deno, then run: deno install -g @anthropic-ai/claude-code
* Bun, then run: bun install -g @anthropic-ai/claude-code

Or set CLAUDE_CLI_PATH, or pass ClaudeCodeOptions(cli_path='/path/to/claude').

Last path checked"""


def _get_candidate_names(system: str) -> list[str]:
    """Get the executable file names to look for on the current system.

    Args:
        system: Lowercase system name (e.g., 'windows', 'darwin', 'linux')

    Returns:
        File names to probe in each directory
    """
    if system == "windows":
        return [f"{CLI_NAME}.exe", f"{CLI_NAME}.cmd", f"{CLI_NAME}.bat", CLI_NAME]
    return [CLI_NAME]


def _select_best_path(paths: list[str], system: str) -> str | None:
    """Select the best path from the candidates found.

    Args:
        paths: Existing candidate paths, in search order
        system: Lowercase system name (e.g., 'windows', 'darwin', 'linux')

    Returns:
        The best path, or None if no paths found
    """
    if not paths:
        return None

    # On Windows, prefer .exe over .cmd/.bat extensions
    if system == "windows":
        for path in paths:
            if path.lower().endswith(".exe"):
                return path

        for path in paths:
            if any(path.lower().endswith(ext) for ext in [".cmd", ".bat"]):
                return path

    return paths[0]


def _find_in_dirs(directories: Sequence[str], system: str) -> str | None:
    """Probe each directory for a CLI executable."""
    candidates = []
    for directory in directories:
        if not directory:
            continue
        for name in _get_candidate_names(system):
            path = os.path.join(directory, name)
            if os.path.isfile(path):
                candidates.append(path)
    return _select_best_path(candidates, system)


def _last_candidate(override: str | None, directories: Sequence[str], system: str) -> str:
    """Path reported as attempted when no CLI was found."""
    if override:
        return override
    for directory in reversed(directories):
        if directory:
            return os.path.join(directory, _get_candidate_names(system)[0])
    return CLI_NAME


def default_fallback_dirs(env: Mapping[str, str] | None = None) -> list[str]:
    """Well-known install directories checked when the CLI is not on PATH.

    Args:
        env: Environment to read HOME from (defaults to os.environ)

    Returns:
        Directories in the order they are checked
    """
    env = os.environ if env is None else env
    home = env.get("HOME", "")

    dirs = ["/usr/local/bin"]
    if home:
        dirs = [
            os.path.join(home, ".npm-global", "bin"),
            "/usr/local/bin",
            os.path.join(home, ".local", "bin"),
            os.path.join(home, "node_modules", ".bin"),
            os.path.join(home, ".yarn", "bin"),
            os.path.join(home, ".bun", "bin"),
            os.path.join(home, ".deno", "bin"),
        ]
    return dirs


def find_cli(
    env: Mapping[str, str] | None = None,
    fallback_dirs: Sequence[str] | None = None,
) -> str:
    """Find the Claude Code CLI executable.

    Checks, in order: the CLAUDE_CLI_PATH override, every directory on
    PATH, then the fallback directories. The first existing file wins.

    Args:
        env: Environment to read from (defaults to os.environ)
        fallback_dirs: Directories checked last (defaults to
            default_fallback_dirs())

    Returns:
        Path to the CLI executable

    Raises:
        CLINotFoundError: If no candidate exists.
    """
    env = os.environ if env is None else env
    system = platform.system().lower()

    override = env.get(CLI_PATH_ENV_VAR)
    if override:
        if os.path.isfile(override):
            return override
        logger.debug("%s is set but does not exist: %s", CLI_PATH_ENV_VAR, override)

    search_path = env.get("PATH", "")
    path_dirs = search_path.split(os.pathsep) if search_path else []
    found = _find_in_dirs(path_dirs, system)
    if found:
        return found

    if fallback_dirs is None:
        fallback_dirs = default_fallback_dirs(env)
    found = _find_in_dirs(fallback_dirs, system)
    if found:
        return found

    raise CLINotFoundError(
        _INSTALL_GUIDANCE,
        cli_path=_last_candidate(override, [*path_dirs, *fallback_dirs], system),
    )
