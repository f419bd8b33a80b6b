"""Shared fixtures: a scripted stand-in for the git binary."""

import subprocess

import pytest

from zgit.git import runner


class FakeGit:
    """Replaces subprocess.run for git calls.

    Responses are keyed by the argument tuple after `git`. Unscripted
    commands succeed with empty output. Every call is recorded.
    """

    def __init__(self):
        self.responses = {}
        self.calls = []

    def on(self, *args, stdout="", stderr="", returncode=0):
        self.responses[tuple(args)] = (returncode, stdout, stderr)
        return self

    def fail(self, *args, stderr="fatal: error", returncode=128):
        return self.on(*args, stderr=stderr, returncode=returncode)

    def __call__(self, cmd, **kwargs):
        assert cmd[0] == "git"
        args = tuple(cmd[1:])
        self.calls.append(args)
        returncode, stdout, stderr = self.responses.get(args, (0, "", ""))
        if kwargs.get("check") and returncode != 0:
            raise subprocess.CalledProcessError(returncode, cmd, output=stdout, stderr=stderr)
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def fake_git(monkeypatch):
    fake = FakeGit()
    monkeypatch.setattr(runner.subprocess, "run", fake)
    return fake


@pytest.fixture
def write_config(tmp_path):
    """Return a function that writes YAML text to a config file and returns its path."""
    def _write(text, name="config.yaml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


VALID_CONFIG = """\
global:
  branches:
    - usr/[^/]+/(?P<ticket>JIRA-\\d+)
    - (?P<ticket>[A-Z]+-\\d+)
  commit:
    message: "[{{.Ticket}}] {{.Message}}"
repos:
  - name: acme/widgets
    branches:
      - feature/(?P<ticket>WID-\\d+)
"""


@pytest.fixture
def config_file(write_config):
    """A valid config file on disk."""
    return write_config(VALID_CONFIG)
