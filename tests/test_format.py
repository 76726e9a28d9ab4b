"""Tests for human and JSON output."""

import json

import click

from ggs.format import describe, format_human, format_json
from ggs.models import RepoReport, RepoStatus, ScanReport, WorkingTreeState


def _report(*repos) -> ScanReport:
    return ScanReport(root="/repos", repos=list(repos))


def _plain(text: str) -> str:
    return click.unstyle(text)


def test_describe_messages():
    assert describe(RepoReport("a", "/repos/a", RepoStatus.CLEAN)) == "has no changes"
    assert describe(RepoReport("b", "/repos/b", RepoStatus.DIRTY, tree=WorkingTreeState(modified=1))) == "has changes"
    assert describe(RepoReport("b", "/repos/b", RepoStatus.DIRTY, tree=WorkingTreeState(staged=2))) == "has staged changes"
    assert describe(RepoReport("d", "/repos/d", RepoStatus.UNPUSHED, ahead=1)) == "has 1 unpushed commit"
    assert describe(RepoReport("d", "/repos/d", RepoStatus.UNPUSHED, ahead=3)) == "has 3 unpushed commits"
    assert describe(RepoReport("e", "/repos/e", RepoStatus.NO_UPSTREAM, branch="dev")) == "has no upstream for branch dev"
    assert describe(RepoReport("e", "/repos/e", RepoStatus.NO_UPSTREAM)) == "has a detached HEAD"
    assert describe(RepoReport("f", "/repos/f", RepoStatus.INACCESSIBLE, error="boom")) == "could not be read"


def test_format_human_hides_clean_by_default():
    report = _report(
        RepoReport("a", "/repos/a", RepoStatus.CLEAN),
        RepoReport("b", "/repos/b", RepoStatus.DIRTY, tree=WorkingTreeState(modified=1, lines=[" M f.txt"])),
    )
    out = _plain(format_human(report))
    assert "b  has changes" in out
    assert "a  has no changes" not in out
    assert "2 repositories: 1 dirty, 1 clean" in out
    assert "f.txt" not in out


def test_format_human_show_all_and_details():
    report = _report(
        RepoReport("a", "/repos/a", RepoStatus.CLEAN, branch="main", upstream="origin/main", behind=2),
        RepoReport("b", "/repos/b", RepoStatus.DIRTY, tree=WorkingTreeState(modified=1, untracked=1, lines=[" M f.txt", "?? g.txt"])),
        RepoReport("c", "/repos/c", RepoStatus.INACCESSIBLE, error="Permission denied"),
    )
    out = _plain(format_human(report, details=True, show_all=True))
    assert "a  has no changes" in out
    assert "main -> origin/main: 0 ahead, 2 behind" in out
    assert "1 modified, 1 untracked" in out
    assert "?? g.txt" in out
    assert "Permission denied" in out


def test_format_human_all_clean():
    report = _report(RepoReport("a", "/repos/a", RepoStatus.CLEAN), RepoReport("b", "/repos/b", RepoStatus.CLEAN))
    assert _plain(format_human(report)) == "All 2 repositories are clean."


def test_format_human_empty():
    assert format_human(_report()) == "No repositories found in /repos."


def test_format_json():
    report = _report(
        RepoReport("a", "/repos/a", RepoStatus.CLEAN),
        RepoReport("d", "/repos/d", RepoStatus.UNPUSHED, branch="main", upstream="origin/main", ahead=1),
    )
    data = json.loads(format_json(report))
    assert data["root"] == "/repos"
    assert data["total"] == 2
    assert data["counts"] == {"CLEAN": 1, "UNPUSHED": 1}
    assert data["repos"][1]["status"] == "UNPUSHED"
    assert data["repos"][1]["ahead"] == 1
    assert "error" not in data["repos"][0]
