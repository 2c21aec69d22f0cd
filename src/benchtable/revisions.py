"""Resolve package names and symbolic git revisions."""

import logging
import subprocess
import tomllib
from pathlib import Path
from typing import Tuple

from benchtable.errors import RevisionError

logger = logging.getLogger(__name__)

DEFAULT_REV = "{DEFAULT}"
DIRTY_REV = "dirty"

_FALLBACK_BRANCHES = ("main", "master")


def _git(path: str, *args: str) -> str:
    cmd = ["git", "-C", str(path), *args]
    result = subprocess.run(cmd, check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    return result.stdout.decode().strip()


def get_default_branch(path: str) -> str:
    """Default branch of the git repository at `path`.

    Uses origin's HEAD when known, otherwise the first local main/master.
    """
    try:
        ref = _git(path, "symbolic-ref", "--short", "refs/remotes/origin/HEAD")
        return ref.split("/", 1)[1] if "/" in ref else ref
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        logger.debug(f"origin/HEAD not available in {path}: {e}")

    for branch in _FALLBACK_BRANCHES:
        try:
            _git(path, "show-ref", "--verify", "--quiet", f"refs/heads/{branch}")
            return branch
        except (subprocess.CalledProcessError, FileNotFoundError):
            continue

    raise RevisionError(f"Could not determine the default branch of {path}")


def parse_rev(rev: str, path: str) -> str:
    """Resolve `{DEFAULT}` to a branch name; other revisions pass through."""
    if rev == DEFAULT_REV:
        branch = get_default_branch(path)
        logger.info(f"Resolved {DEFAULT_REV} to {branch}")
        return branch
    return rev


def _name_from_url(url: str) -> str:
    name = url.rstrip("/").rsplit("/", 1)[-1]
    return name[: -len(".git")] if name.endswith(".git") else name


def _name_from_path(path: str) -> str:
    root = Path(path).resolve()
    pyproject = root / "pyproject.toml"
    if pyproject.exists():
        with open(pyproject, "rb") as f:
            name = tomllib.load(f).get("project", {}).get("name")
        if name:
            return name
    return root.name


def get_package_name_defaults(package_name: str = "", url: str = "", path: str = "") -> Tuple[str, str, str]:
    """Fill in the package name from a URL or a source path.

    Returns:
        Tuple of (package_name, url, path); path defaults to "." when
        nothing else identifies the package.
    """
    if package_name:
        return package_name, url, path

    if url:
        return _name_from_url(url), url, path

    if not path:
        path = "."
    return _name_from_path(path), url, path
