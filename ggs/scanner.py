"""Repository scanner — enumerates a directory's children and classifies each one."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .config import ScanConfig
from .errors import InvalidRoot, VcsError
from .models import RepoReport, RepoStatus, ScanReport
from .vcs import GitClient, VersionControlClient

logger = logging.getLogger(__name__)


def _has_marker(path: Path, marker: str) -> bool:
    """True if `marker` is a direct child of path. Raises OSError if path can't be listed."""
    return any(child.name == marker for child in path.iterdir())


def _candidates(root: Path, config: ScanConfig) -> list[Path]:
    """Immediate subdirectories of root, minus skipped and hidden names."""
    found = []
    try:
        children = sorted(root.iterdir(), key=lambda p: p.name)
        dirs = [child for child in children if child.is_dir()]
    except OSError as e:
        raise InvalidRoot(f"Cannot read directory: {root} ({e.strerror or e})") from e
    for child in dirs:
        if child.name in config.skip:
            logger.debug("skipping %s (configured)", child)
            continue
        if child.name.startswith(".") and not config.include_hidden:
            logger.debug("skipping %s (hidden)", child)
            continue
        found.append(child)
    return found


def classify(path: Path, client: VersionControlClient, marker: str = ".git") -> RepoReport:
    """Classify one candidate directory. Never raises for per-directory failures."""
    report = RepoReport(name=path.name, path=str(path), status=RepoStatus.NOT_A_REPOSITORY)
    try:
        if not _has_marker(path, marker):
            return report
        tree = client.working_tree(path)
        report.tree = tree
        if tree.is_dirty:
            report.status = RepoStatus.DIRTY
            return report
        up = client.upstream(path)
        report.branch = up.branch
        report.upstream = up.upstream
        report.ahead = up.ahead
        report.behind = up.behind
        if up.upstream is None:
            report.status = RepoStatus.NO_UPSTREAM
        elif up.ahead > 0:
            report.status = RepoStatus.UNPUSHED
        else:
            report.status = RepoStatus.CLEAN
    except (OSError, VcsError) as e:
        logger.warning("cannot inspect %s: %s", path, e)
        report.status = RepoStatus.INACCESSIBLE
        report.error = str(e)
    return report


def scan(
    root: str | Path,
    client: VersionControlClient | None = None,
    config: ScanConfig | None = None,
) -> ScanReport:
    """
    Scan the immediate subdirectories of root and classify each repository.
    Non-repositories are left out. Entries are sorted by directory name.
    """
    config = config or ScanConfig()
    root_path = Path(root).expanduser()
    if not root_path.exists():
        raise InvalidRoot(f"Directory not found: {root_path}")
    if not root_path.is_dir():
        raise InvalidRoot(f"Not a directory: {root_path}")
    root_path = root_path.resolve()

    if client is None:
        client = GitClient(executable=config.git, timeout=config.timeout)

    candidates = _candidates(root_path, config)
    logger.debug("found %d candidate(s) under %s", len(candidates), root_path)

    if config.jobs > 1 and len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=config.jobs) as pool:
            reports = list(pool.map(lambda p: classify(p, client, config.marker), candidates))
    else:
        reports = [classify(p, client, config.marker) for p in candidates]

    repos = [r for r in reports if r.status != RepoStatus.NOT_A_REPOSITORY]
    repos.sort(key=lambda r: r.name)
    return ScanReport(root=str(root_path), repos=repos)
