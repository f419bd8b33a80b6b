"""Commit Message Rendering Package"""

from zgit.errors import TemplateError
from zgit.message.renderer import CommitTemplate, render_commit_message, FIELDS

__all__ = [
    "CommitTemplate",
    "TemplateError",
    "render_commit_message",
    "FIELDS",
]
