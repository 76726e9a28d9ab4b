"""Version control client — git status and ahead/behind queries via subprocess."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Protocol

from .errors import VcsError
from .models import UpstreamState, WorkingTreeState

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

# Porcelain v1 XY pairs that mean an unresolved merge
CONFLICT_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}


class VersionControlClient(Protocol):
    """Read-only queries the scanner needs from a version control tool."""

    def working_tree(self, path: Path) -> WorkingTreeState:
        ...

    def upstream(self, path: Path) -> UpstreamState:
        ...


def parse_porcelain(output: str) -> WorkingTreeState:
    """Count staged, modified, untracked and conflicted entries in porcelain v1 output."""
    state = WorkingTreeState()
    for line in output.splitlines():
        if len(line) < 3:
            continue
        code = line[:2]
        if code == "!!":
            continue
        state.lines.append(line)
        if code == "??":
            state.untracked += 1
        elif code in CONFLICT_CODES:
            state.conflicted += 1
        else:
            x, y = code[0], code[1]
            if x != " ":
                state.staged += 1
            if y != " ":
                state.modified += 1
    return state


def parse_left_right_count(output: str) -> tuple[int, int]:
    """Parse `rev-list --left-right --count upstream...HEAD` into (behind, ahead)."""
    parts = output.split()
    if len(parts) != 2:
        raise VcsError(f"Unexpected rev-list output: {output.strip()!r}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as e:
        raise VcsError(f"Unexpected rev-list output: {output.strip()!r}") from e


class GitClient:
    """Runs the git CLI against one repository per call. Never writes."""

    def __init__(self, executable: str = "git", timeout: float = DEFAULT_TIMEOUT) -> None:
        self.executable = executable
        self.timeout = timeout
        # GIT_OPTIONAL_LOCKS=0 stops `git status` from refreshing the index
        self._env = dict(os.environ, GIT_OPTIONAL_LOCKS="0", LC_ALL="C")

    def _run(self, path: Path, *args: str) -> subprocess.CompletedProcess:
        cmd = [self.executable, "-C", str(path), *args]
        logger.debug("running %s", " ".join(cmd))
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                env=self._env,
            )
        except FileNotFoundError as e:
            raise VcsError(f"git executable not found: {self.executable}", command=cmd) from e
        except subprocess.TimeoutExpired as e:
            raise VcsError(f"git timed out after {self.timeout:g}s", command=cmd) from e

    def _check(self, path: Path, *args: str) -> str:
        result = self._run(path, *args)
        if result.returncode != 0:
            raise VcsError(
                f"git {args[0]} failed in {path}",
                command=[self.executable, "-C", str(path), *args],
                returncode=result.returncode,
                stderr=result.stderr or "",
            )
        return result.stdout

    def working_tree(self, path: Path) -> WorkingTreeState:
        out = self._check(path, "status", "--porcelain=v1", "--untracked-files=all")
        return parse_porcelain(out)

    def current_branch(self, path: Path) -> str | None:
        """Branch name, including unborn branches. None when HEAD is detached."""
        result = self._run(path, "symbolic-ref", "--short", "-q", "HEAD")
        if result.returncode == 1:
            return None
        if result.returncode != 0:
            raise VcsError(
                f"git symbolic-ref failed in {path}",
                command=[self.executable, "-C", str(path), "symbolic-ref", "--short", "-q", "HEAD"],
                returncode=result.returncode,
                stderr=result.stderr or "",
            )
        return result.stdout.strip() or None

    def upstream(self, path: Path) -> UpstreamState:
        branch = self.current_branch(path)
        state = UpstreamState(branch=branch)
        if branch is None:
            return state
        result = self._run(path, "rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{upstream}")
        if result.returncode != 0:
            # No tracking config, or the remote branch is gone
            logger.debug("no upstream for %s in %s", branch, path)
            return state
        state.upstream = result.stdout.strip() or None
        if state.upstream is None:
            return state
        out = self._check(path, "rev-list", "--left-right", "--count", "@{upstream}...HEAD")
        state.behind, state.ahead = parse_left_right_count(out)
        return state
