"""
Configuration Management Package

Looks for config in multiple places (in order):

1. $ZGIT_CONFIG (explicit path)
2. config.yaml in current directory (project-specific)
3. .zgit.yaml in current directory
4. config.yaml in the user config directory (~/.config/zgit/)

The first file found is used; files are never merged.

Config format (YAML):

    global:
      branches:
        - usr/[^/]+/(?P<ticket>JIRA-\\d+)
      commit:
        message: "[{{.Ticket}}] {{.Message}}"
    repos:
      - name: owner/repo
        branches:
          - feature/(?P<ticket>PROJ-\\d+)
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml

from zgit.errors import ConfigError, ConfigNotFoundError, TemplateError
from zgit.message import CommitTemplate

LOG = logging.getLogger(__name__)

APP_NAME = "zgit"
CONFIG_FILENAME = "config.yaml"
LOCAL_CONFIG_FILENAMES = (CONFIG_FILENAME, ".zgit.yaml")
CONFIG_ENV = "ZGIT_CONFIG"

TICKET_GROUP = "ticket"
GLOBAL_SCOPE = "global"

# Allow optional spaces: {{.Ticket}} or {{ .Ticket }}
TICKET_PLACEHOLDER_RE = re.compile(r'\{\{\s*\.Ticket\s*\}\}')
MESSAGE_PLACEHOLDER_RE = re.compile(r'\{\{\s*\.Message\s*\}\}')


def user_config_dir() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_NAME


def user_config_path() -> Path:
    return user_config_dir() / CONFIG_FILENAME


@dataclass(frozen=True)
class BranchPattern:
    """A branch regex with a required named group ``ticket``."""
    pattern: str
    regex: re.Pattern = field(repr=False, compare=False)

    @classmethod
    def compile(cls, pattern: Any, scope: str) -> 'BranchPattern':
        if not isinstance(pattern, str) or not pattern:
            raise ConfigError(f"branch pattern {pattern!r} of {scope} must be a non-empty string")
        try:
            regex = re.compile(pattern)
        except re.error as e:
            raise ConfigError(f"branch pattern {pattern} of {scope} is not a valid regular expression: {e}")
        if TICKET_GROUP not in regex.groupindex:
            raise ConfigError(f"branch pattern {pattern} of {scope} must contain (?P<{TICKET_GROUP}>...)")
        return cls(pattern=pattern, regex=regex)

    def extract(self, branch: str) -> Optional[str]:
        """Ticket captured from ``branch``.

        None when the pattern does not match, or matches without the ticket
        group taking part (e.g. an optional group). An empty string is a
        real, empty capture.
        """
        match = self.regex.search(branch)
        if match is None:
            return None
        return match.group(TICKET_GROUP)


@dataclass(frozen=True)
class Config:
    """Validated zgit configuration. Immutable once loaded."""
    global_branch_patterns: tuple[BranchPattern, ...]
    commit_message_template: str
    repository_rules: Mapping[str, tuple[BranchPattern, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    source: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Any, source: Optional[Path] = None) -> 'Config':
        """Build and validate a Config from parsed YAML.

        Raises:
            ConfigError: naming the first invariant the data violates.
        """
        if not isinstance(data, dict):
            raise ConfigError("config must be a mapping with a 'global' section")

        global_section = _mapping(data.get("global"), "global")
        commit_section = _mapping(global_section.get("commit"), "global.commit")
        template = commit_section.get("message")
        if not isinstance(template, str):
            template = ""

        if not TICKET_PLACEHOLDER_RE.search(template):
            raise ConfigError("commit message template must contain {{.Ticket}} or {{ .Ticket }}")
        if not MESSAGE_PLACEHOLDER_RE.search(template):
            raise ConfigError("commit message template must contain {{.Message}} or {{ .Message }}")

        global_patterns = _pattern_list(global_section.get("branches"), "global.branches")
        if not global_patterns:
            raise ConfigError("at least one global branch pattern must be defined")

        raw_repos = data.get("repos") or []
        if not isinstance(raw_repos, list):
            raise ConfigError("repos must be a list of {name, branches} entries")
        repo_patterns: dict[str, list] = {}
        for index, repo in enumerate(raw_repos):
            repo = _mapping(repo, f"repos[{index}]")
            name = repo.get("name")
            if not isinstance(name, str) or not name.strip():
                raise ConfigError(f"repos[{index}] must have a name like 'owner/repo'")
            patterns = _pattern_list(repo.get("branches"), f"repository '{name}'")
            if not patterns:
                raise ConfigError(f"repository '{name}' must have at least one branch pattern")
            # Entries that repeat a name are evaluated in file order
            repo_patterns.setdefault(name.strip(), []).extend(patterns)

        try:
            CommitTemplate(template)
        except TemplateError as e:
            raise ConfigError(f"invalid commit message template: {e}")

        return cls(
            global_branch_patterns=tuple(BranchPattern.compile(p, GLOBAL_SCOPE) for p in global_patterns),
            commit_message_template=template,
            repository_rules=MappingProxyType({
                name: tuple(BranchPattern.compile(p, f"repository '{name}'") for p in patterns)
                for name, patterns in repo_patterns.items()
            }),
            source=source,
        )


def _mapping(value: Any, where: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{where} must be a mapping")
    return value


def _pattern_list(value: Any, where: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{where} must be a list of branch patterns")
    return value


class ConfigManager:
    """Finds, loads and caches the configuration.

    One manager is created per process by the CLI and handed to whatever
    needs the config; it reads the file at most once.
    """

    def __init__(self, search_paths: Optional[list[Path]] = None):
        self._search_paths = search_paths
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def search_paths(self) -> list[Path]:
        """Candidate files in priority order, relative to the current cwd."""
        if self._search_paths is not None:
            return list(self._search_paths)
        paths = []
        explicit = os.environ.get(CONFIG_ENV)
        if explicit:
            paths.append(Path(explicit).expanduser())
        cwd = Path.cwd()
        paths.extend(cwd / name for name in LOCAL_CONFIG_FILENAMES)
        paths.append(user_config_path())
        return paths

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        tried = []
        for path in self.search_paths():
            LOG.info("try loading %s", path)
            tried.append(path)
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    text = f.read()
            except FileNotFoundError:
                continue
            except OSError as e:
                LOG.warning("failed to read %s: %s", path, e)
                continue

            self._config = self._parse(text, path)
            self._config_path = path
            LOG.info("used config file: %s", path)
            return self._config

        raise ConfigNotFoundError(
            "config file not found (tried: "
            + ", ".join(str(p) for p in tried)
            + "). Run 'zgit init' to create one."
        )

    def _parse(self, text: str, path: Path) -> Config:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"could not parse {path}: {e}")
        try:
            return Config.from_dict(data, source=path)
        except ConfigError as e:
            raise ConfigError(f"{path}: {e}")

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


__all__ = [
    "Config",
    "ConfigManager",
    "BranchPattern",
    "ConfigError",
    "ConfigNotFoundError",
    "user_config_dir",
    "user_config_path",
    "CONFIG_ENV",
    "LOCAL_CONFIG_FILENAMES",
    "GLOBAL_SCOPE",
]
