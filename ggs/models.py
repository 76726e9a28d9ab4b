"""Structured results for a directory scan."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class RepoStatus(str, Enum):
    CLEAN = "CLEAN"
    DIRTY = "DIRTY"
    UNPUSHED = "UNPUSHED"
    NO_UPSTREAM = "NO_UPSTREAM"
    NOT_A_REPOSITORY = "NOT_A_REPOSITORY"
    INACCESSIBLE = "INACCESSIBLE"


# Statuses that mean local work could be lost
ATTENTION_STATUSES = (RepoStatus.DIRTY, RepoStatus.UNPUSHED)


@dataclass
class WorkingTreeState:
    """Parsed `git status --porcelain` output."""

    staged: int = 0
    modified: int = 0
    untracked: int = 0
    conflicted: int = 0
    lines: list[str] = field(default_factory=list)

    @property
    def is_dirty(self) -> bool:
        return bool(self.staged or self.modified or self.untracked or self.conflicted)

    @property
    def only_staged(self) -> bool:
        """True when every change is already in the index."""
        return self.staged > 0 and not (self.modified or self.untracked or self.conflicted)

    def to_dict(self) -> dict:
        return {
            "staged": self.staged,
            "modified": self.modified,
            "untracked": self.untracked,
            "conflicted": self.conflicted,
            "lines": list(self.lines),
        }


@dataclass
class UpstreamState:
    """Current branch and how it compares to its tracked remote branch."""

    branch: Optional[str] = None  # None when HEAD is detached
    upstream: Optional[str] = None  # e.g. "origin/main"; None when nothing is tracked
    ahead: int = 0
    behind: int = 0


@dataclass
class RepoReport:
    """Classification of a single candidate directory."""

    name: str
    path: str
    status: RepoStatus
    branch: Optional[str] = None
    upstream: Optional[str] = None
    ahead: int = 0
    behind: int = 0
    tree: Optional[WorkingTreeState] = None
    error: Optional[str] = None  # set for INACCESSIBLE

    def to_dict(self) -> dict:
        out = {
            "name": self.name,
            "path": self.path,
            "status": self.status.value,
            "branch": self.branch,
            "upstream": self.upstream,
            "ahead": self.ahead,
            "behind": self.behind,
        }
        if self.tree is not None:
            out["tree"] = self.tree.to_dict()
        if self.error:
            out["error"] = self.error
        return out


@dataclass
class ScanReport:
    """All repositories found directly under a scan root, sorted by name."""

    root: str
    repos: list[RepoReport] = field(default_factory=list)

    def by_status(self) -> dict[RepoStatus, list[RepoReport]]:
        grouped: dict[RepoStatus, list[RepoReport]] = {}
        for r in self.repos:
            grouped.setdefault(r.status, []).append(r)
        return grouped

    @property
    def needs_attention(self) -> list[RepoReport]:
        return [r for r in self.repos if r.status in ATTENTION_STATUSES]

    def as_mapping(self) -> dict[str, RepoStatus]:
        return {r.name: r.status for r in self.repos}

    def to_dict(self) -> dict:
        counts = {status.value: len(items) for status, items in self.by_status().items()}
        return {
            "root": self.root,
            "total": len(self.repos),
            "counts": counts,
            "repos": [r.to_dict() for r in self.repos],
        }
