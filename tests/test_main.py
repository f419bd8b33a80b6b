"""
Tests for the command dispatcher: directory switch, local vs forwarded
commands, and exit codes.

Run with:
    pytest tests/test_main.py -v
"""

import os

import pytest

from zgit.cli import main as main_module
from zgit.cli.main import main


@pytest.fixture
def chdirs(monkeypatch):
    """Record directory switches instead of performing them."""
    calls = []
    monkeypatch.setattr(main_module.os, "chdir", lambda path: calls.append(path))
    return calls


@pytest.fixture
def local_handlers(monkeypatch):
    """Replace local command handlers with recorders."""
    calls = []

    def recorder(name):
        def _handler(*args, **kwargs):
            calls.append((name, args, kwargs))
            return 0
        return _handler

    for name in ("run_commit", "run_force_pull", "run_init", "run_version", "run_open", "run_pr", "run_completion"):
        monkeypatch.setattr(main_module, name, recorder(name))
    return calls


class TestForwarding:

    def test_unknown_command_is_forwarded_verbatim(self, fake_git, local_handlers):
        assert main(["frobnicate", "--flag", "-x", "value"]) == 0
        assert fake_git.calls == [("frobnicate", "--flag", "-x", "value")]
        assert local_handlers == []

    def test_git_exit_status_is_preserved(self, fake_git):
        fake_git.on("status", returncode=128)
        assert main(["status"]) == 128

    def test_repo_dir_then_forward(self, fake_git, chdirs):
        assert main(["-C", "/tmp/repo", "status"]) == 0
        assert chdirs == ["/tmp/repo"]
        assert fake_git.calls == [("status",)]

    def test_chdir_happens_before_forwarding(self, monkeypatch, fake_git):
        order = []
        monkeypatch.setattr(main_module.os, "chdir", lambda path: order.append("chdir"))
        monkeypatch.setattr(main_module, "run_git", lambda *args: order.append(("git", args)) or 0)
        main(["--repo-dir", "/tmp/repo", "log", "--oneline"])
        assert order == ["chdir", ("git", ("log", "--oneline"))]

    def test_flags_before_command_are_forwarded(self, fake_git):
        main(["--no-pager", "log"])
        assert fake_git.calls == [("--no-pager", "log")]

    def test_real_directory_switch(self, tmp_path, fake_git, monkeypatch):
        monkeypatch.chdir(os.getcwd())  # restored after the test
        main(["-C", str(tmp_path), "status"])
        assert os.path.samefile(os.getcwd(), tmp_path)


class TestLocalDispatch:

    def test_commit_is_local(self, fake_git, local_handlers):
        assert main(["commit", "-m", "x"]) == 0
        assert fake_git.calls == []
        name, args, kwargs = local_handlers[0]
        assert name == "run_commit"
        assert args == (["-m", "x"],)
        assert set(kwargs) == {"repo", "config_manager"}

    def test_commit_unknown_flags_reach_handler(self, local_handlers):
        main(["commit", "--frobnicate", "-m", "x", "--no-verify"])
        assert local_handlers[0][1] == (["--frobnicate", "-m", "x", "--no-verify"],)

    def test_repo_dir_then_local(self, chdirs, local_handlers):
        main(["-C", "/tmp/repo", "commit", "-m", "x"])
        assert chdirs == ["/tmp/repo"]
        assert local_handlers[0][0] == "run_commit"

    def test_force_pull(self, local_handlers):
        main(["force-pull", "-b", "develop"])
        name, args, kwargs = local_handlers[0]
        assert (name, args) == ("run_force_pull", ("develop",))

    def test_pr(self, local_handlers):
        main(["pr", "--base", "develop"])
        name, args, _ = local_handlers[0]
        assert (name, args) == ("run_pr", ("origin", "develop"))

    def test_version(self, local_handlers):
        main(["version"])
        assert local_handlers[0][0] == "run_version"

    def test_completion_shell(self, local_handlers):
        main(["completion", "zsh"])
        assert local_handlers[0][:2] == ("run_completion", ("zsh",))


class TestHelpAndErrors:

    @pytest.mark.parametrize("argv", [[], ["-h"], ["--help"], ["-C", "/tmp/repo"]])
    def test_help(self, argv, capsys, chdirs, fake_git):
        assert main(argv) == 0
        assert "usage: zgit" in capsys.readouterr().out
        assert fake_git.calls == []

    def test_help_command(self, capsys):
        assert main(["help", "pr"]) == 0
        assert "usage: zgit pr" in capsys.readouterr().out

    def test_missing_repo_dir_value(self, capsys, fake_git):
        assert main(["-C"]) == 2
        assert "requires a directory" in capsys.readouterr().err
        assert fake_git.calls == []

    def test_bad_directory(self, tmp_path, capsys, fake_git):
        assert main(["-C", str(tmp_path / "missing"), "status"]) == 1
        assert "failed to change to directory" in capsys.readouterr().err
        assert fake_git.calls == []

    def test_handler_errors_are_reported(self, monkeypatch, capsys):
        from zgit.errors import TicketNotFoundError

        def failing(*args, **kwargs):
            raise TicketNotFoundError(branch="main", repository="acme/widgets")

        monkeypatch.setattr(main_module, "run_commit", failing)
        assert main(["commit", "-m", "x"]) == 1
        assert "branch 'main'" in capsys.readouterr().err

    def test_usage_errors_exit_2(self, capsys, fake_git):
        assert main(["commit", "-m"]) == 2
        assert "requires a message" in capsys.readouterr().err
        assert fake_git.calls == []
