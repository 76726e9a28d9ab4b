"""Terminal and JSON output for scan reports."""

import json
import shutil
from typing import List

import click

from .models import RepoReport, RepoStatus, ScanReport

STATUS_COLORS = {
    RepoStatus.CLEAN: "green",
    RepoStatus.DIRTY: "red",
    RepoStatus.UNPUSHED: "yellow",
    RepoStatus.NO_UPSTREAM: "cyan",
    RepoStatus.INACCESSIBLE: "magenta",
}

# Summary line order
SUMMARY_ORDER = [
    RepoStatus.DIRTY,
    RepoStatus.UNPUSHED,
    RepoStatus.NO_UPSTREAM,
    RepoStatus.INACCESSIBLE,
    RepoStatus.CLEAN,
]

MAX_DETAIL_LINES = 10


def _get_width() -> int:
    try:
        return min(72, shutil.get_terminal_size((72, 24)).columns)
    except OSError:
        return 72


def describe(r: RepoReport) -> str:
    """Short phrase for a repository's state, e.g. 'has staged changes'."""
    if r.status == RepoStatus.DIRTY:
        if r.tree is not None and r.tree.only_staged:
            return "has staged changes"
        return "has changes"
    if r.status == RepoStatus.UNPUSHED:
        noun = "commit" if r.ahead == 1 else "commits"
        return f"has {r.ahead} unpushed {noun}"
    if r.status == RepoStatus.NO_UPSTREAM:
        if r.branch is None:
            return "has a detached HEAD"
        return f"has no upstream for branch {r.branch}"
    if r.status == RepoStatus.INACCESSIBLE:
        return "could not be read"
    return "has no changes"


def _detail_lines(r: RepoReport) -> List[str]:
    """Extra lines shown under a repository with --details."""
    lines: List[str] = []
    if r.status == RepoStatus.DIRTY and r.tree is not None:
        t = r.tree
        counts = [
            f"{n} {label}"
            for n, label in (
                (t.staged, "staged"),
                (t.modified, "modified"),
                (t.untracked, "untracked"),
                (t.conflicted, "conflicted"),
            )
            if n
        ]
        lines.append("    " + ", ".join(counts))
        for ln in t.lines[:MAX_DETAIL_LINES]:
            lines.append(f"    {ln}")
        if len(t.lines) > MAX_DETAIL_LINES:
            lines.append(f"    ... {len(t.lines) - MAX_DETAIL_LINES} more")
    elif r.upstream:
        lines.append(f"    {r.branch} -> {r.upstream}: {r.ahead} ahead, {r.behind} behind")
    if r.error:
        lines.append(f"    {r.error}")
    return lines


def _summary(report: ScanReport) -> str:
    grouped = report.by_status()
    parts = [
        f"{len(grouped[s])} {s.value.lower().replace('_', ' ')}"
        for s in SUMMARY_ORDER
        if grouped.get(s)
    ]
    noun = "repository" if len(report.repos) == 1 else "repositories"
    return f"{len(report.repos)} {noun}: " + ", ".join(parts)


def format_human(report: ScanReport, details: bool = False, show_all: bool = False) -> str:
    """Build the human terminal output as a single string."""
    if not report.repos:
        return f"No repositories found in {report.root}."

    shown = [r for r in report.repos if show_all or r.status != RepoStatus.CLEAN]
    if not shown:
        noun = "repository is" if len(report.repos) == 1 else "repositories are"
        return click.style(f"All {len(report.repos)} {noun} clean.", fg="green")

    width = _get_width()
    name_width = min(max(len(r.name) for r in shown), width // 2)
    lines = []
    for r in shown:
        tag = click.style(f"[{r.status.value}]".ljust(15), fg=STATUS_COLORS.get(r.status))
        lines.append(f"{tag}{r.name.ljust(name_width)}  {describe(r)}")
        if details:
            for ln in _detail_lines(r):
                lines.append(click.style(ln, dim=True))
    lines.append("─" * width)
    lines.append(_summary(report))
    return "\n".join(lines)


def format_json(report: ScanReport) -> str:
    """JSON output for piping/CI."""
    return json.dumps(report.to_dict(), indent=2)
