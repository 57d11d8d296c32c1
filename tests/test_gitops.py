"""Tests for gitops module."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from git.exc import GitCommandError, GitCommandNotFound

from expcat_skills.errors import ToolingError
from expcat_skills.gitops import (
    DEFAULT_BRANCH,
    STRATEGY_FULL,
    STRATEGY_SPARSE,
    GitOps,
    GitOpsError,
)
from expcat_skills.types import GithubLocation


@pytest.fixture
def mock_git() -> MagicMock:
    """Create a mock git command wrapper reporting a modern git."""
    git = MagicMock()
    git.version.return_value = "git version 2.43.0"
    return git


@pytest.fixture
def location() -> GithubLocation:
    """Location with a subpath."""
    return GithubLocation("owner", "repo", "main", "skills/foo")


class TestRequireGit:
    """Tests for the git availability check."""

    def test_present(self, mock_git: MagicMock) -> None:
        """Test a working git passes."""
        GitOps(git=mock_git).require_git()
        mock_git.version.assert_called_once()

    def test_missing(self, mock_git: MagicMock) -> None:
        """Test a missing git raises ToolingError with exit code 3."""
        mock_git.version.side_effect = GitCommandNotFound("git", "not found")

        with pytest.raises(ToolingError, match="Missing required command: git") as exc_info:
            GitOps(git=mock_git).require_git()
        assert exc_info.value.exit_code == 3


class TestVersion:
    """Tests for git version detection."""

    def test_parses_version(self, mock_git: MagicMock) -> None:
        """Test major and minor are parsed."""
        assert GitOps(git=mock_git).get_version() == (2, 43)

    def test_windows_suffix(self, mock_git: MagicMock) -> None:
        """Test vendor suffixes are ignored."""
        mock_git.version.return_value = "git version 2.45.1.windows.1"
        assert GitOps(git=mock_git).get_version() == (2, 45)

    def test_unparseable(self, mock_git: MagicMock) -> None:
        """Test unknown output yields (0, 0)."""
        mock_git.version.return_value = "something else"
        assert GitOps(git=mock_git).get_version() == (0, 0)

    def test_failure(self, mock_git: MagicMock) -> None:
        """Test a failing git yields (0, 0)."""
        mock_git.version.side_effect = GitCommandError("version", 1)
        assert GitOps(git=mock_git).get_version() == (0, 0)

    @pytest.mark.parametrize(
        ("output", "expected"),
        [
            ("git version 2.25.0", True),
            ("git version 2.24.9", False),
            ("git version 3.0.0", True),
            ("git version 1.9.5", False),
        ],
    )
    def test_sparse_threshold(self, mock_git: MagicMock, output: str, expected: bool) -> None:
        """Test sparse checkout needs git 2.25 or newer."""
        mock_git.version.return_value = output
        assert GitOps(git=mock_git).supports_sparse_checkout() is expected


class TestDefaultBranch:
    """Tests for default branch resolution."""

    def test_symref(self, mock_git: MagicMock) -> None:
        """Test the branch is read from the symbolic HEAD."""
        mock_git.ls_remote.return_value = (
            "ref: refs/heads/develop\tHEAD\n0123456789abcdef\tHEAD"
        )

        branch = GitOps(git=mock_git).default_branch("owner", "repo")

        assert branch == "develop"
        mock_git.ls_remote.assert_called_once_with(
            "--symref", "https://github.com/owner/repo.git", "HEAD"
        )

    def test_query_failure_falls_back(self, mock_git: MagicMock) -> None:
        """Test an unreachable remote yields main."""
        mock_git.ls_remote.side_effect = GitCommandError("ls-remote", 128)
        assert GitOps(git=mock_git).default_branch("owner", "repo") == DEFAULT_BRANCH == "main"

    def test_no_symref_falls_back(self, mock_git: MagicMock) -> None:
        """Test output without a symbolic ref yields main."""
        mock_git.ls_remote.return_value = "0123456789abcdef\tHEAD"
        assert GitOps(git=mock_git).default_branch("owner", "repo") == "main"


class TestFetch:
    """Tests for the sparse-then-full fetch strategy."""

    @patch("expcat_skills.gitops.Repo")
    def test_sparse_success(
        self, mock_repo: MagicMock, mock_git: MagicMock, location: GithubLocation, tmp_path: Path
    ) -> None:
        """Test a subpath is fetched with sparse checkout."""
        dest = tmp_path / "checkout"
        repo = mock_repo.init.return_value

        result = GitOps(git=mock_git).fetch(location, dest)

        assert result.strategy == STRATEGY_SPARSE
        assert result.base_path == dest / "skills/foo"
        mock_repo.init.assert_called_once_with(dest)
        repo.create_remote.assert_called_once_with("origin", "https://github.com/owner/repo.git")
        repo.git.sparse_checkout.assert_any_call("init", "--cone")
        repo.git.sparse_checkout.assert_any_call("set", "skills/foo")
        repo.git.pull.assert_called_once_with("--depth=1", "origin", "main")
        mock_repo.clone_from.assert_not_called()

    @patch("expcat_skills.gitops.Repo")
    def test_sparse_failure_falls_back_once(
        self, mock_repo: MagicMock, mock_git: MagicMock, location: GithubLocation, tmp_path: Path
    ) -> None:
        """Test a failed sparse checkout is cleaned and followed by one full clone."""
        dest = tmp_path / "checkout"

        def fail_pull(*args: str) -> None:
            (dest / "partial").mkdir(parents=True)
            raise GitCommandError("pull", 1)

        mock_repo.init.return_value.git.pull.side_effect = fail_pull

        result = GitOps(git=mock_git).fetch(location, dest)

        assert result.strategy == STRATEGY_FULL
        assert not (dest / "partial").exists()
        mock_repo.clone_from.assert_called_once_with(
            "https://github.com/owner/repo.git",
            dest,
            depth=1,
            filter="blob:none",
            single_branch=True,
            branch="main",
        )

    @patch("expcat_skills.gitops.Repo")
    def test_full_failure_after_sparse_failure(
        self, mock_repo: MagicMock, mock_git: MagicMock, location: GithubLocation, tmp_path: Path
    ) -> None:
        """Test both strategies failing raises GitOpsError with exit code 4."""
        mock_repo.init.side_effect = GitCommandError("init", 1)
        mock_repo.clone_from.side_effect = GitCommandError("clone", 128)

        with pytest.raises(GitOpsError, match="Failed to clone repository owner/repo") as exc_info:
            GitOps(git=mock_git).fetch(location, tmp_path / "checkout")

        assert exc_info.value.exit_code == 4
        assert mock_repo.clone_from.call_count == 1

    @patch("expcat_skills.gitops.Repo")
    def test_root_location_uses_full_clone(
        self, mock_repo: MagicMock, mock_git: MagicMock, tmp_path: Path
    ) -> None:
        """Test a repository root skips sparse checkout."""
        location = GithubLocation("owner", "repo", "main")

        result = GitOps(git=mock_git).fetch(location, tmp_path / "checkout")

        assert result.strategy == STRATEGY_FULL
        assert result.base_path == tmp_path / "checkout"
        mock_repo.init.assert_not_called()
        mock_repo.clone_from.assert_called_once()

    @patch("expcat_skills.gitops.Repo")
    def test_old_git_uses_full_clone(
        self, mock_repo: MagicMock, mock_git: MagicMock, location: GithubLocation, tmp_path: Path
    ) -> None:
        """Test git older than 2.25 skips sparse checkout."""
        mock_git.version.return_value = "git version 2.20.1"

        result = GitOps(git=mock_git).fetch(location, tmp_path / "checkout")

        assert result.strategy == STRATEGY_FULL
        mock_repo.init.assert_not_called()
