"""Commit message templates.

Templates use the Go text/template action syntax the config format has always
used, restricted to the two values a commit message needs:

    "[{{.Ticket}}] {{.Message}}"
    "{{ .Ticket }}: {{ .Message }}"

``{{/* ... */}}`` comments are accepted and render as nothing. Anything else
inside ``{{ }}`` is an error.
"""

import re
from dataclasses import dataclass

from zgit.errors import TemplateError

FIELDS = ('Ticket', 'Message')

ACTION_RE = re.compile(r'\{\{(?P<body>.*?)\}\}', re.DOTALL)
FIELD_RE = re.compile(r'^\s*\.(?P<name>[A-Za-z_]\w*)\s*$')
COMMENT_RE = re.compile(r'^/\*.*\*/$', re.DOTALL)


@dataclass(frozen=True)
class _Field:
    name: str


class CommitTemplate:
    """A parsed commit message template.

    Parsing happens in the constructor so a broken template is reported when
    the configuration is loaded, not halfway through a commit.
    """

    def __init__(self, source: str):
        self.source = source
        self._parts = self._parse(source)

    @staticmethod
    def _parse(source: str) -> list:
        parts: list = []
        pos = 0
        for match in ACTION_RE.finditer(source):
            literal = source[pos:match.start()]
            if '{{' in literal:
                raise TemplateError(f"malformed action at offset {pos + literal.index('{{')}: {source!r}")
            if literal:
                parts.append(literal)
            parts.append(CommitTemplate._parse_action(match.group('body'), source))
            pos = match.end()

        tail = source[pos:]
        if '{{' in tail:
            raise TemplateError(f"unclosed action at offset {pos + tail.index('{{')}: {source!r}")
        if tail:
            parts.append(tail)
        return parts

    @staticmethod
    def _parse_action(body: str, source: str):
        if COMMENT_RE.match(body):
            return ''
        if not body.strip():
            raise TemplateError(f"empty action in template: {source!r}")
        field = FIELD_RE.match(body)
        if not field:
            raise TemplateError(f"unsupported action {{{{{body}}}}} in template: {source!r}")
        name = field.group('name')
        if name not in FIELDS:
            raise TemplateError(
                f"unknown field .{name} in template (supported: {', '.join('.' + f for f in FIELDS)})"
            )
        return _Field(name)

    @property
    def fields(self) -> set[str]:
        return {part.name for part in self._parts if isinstance(part, _Field)}

    def render(self, **values: str) -> str:
        """Substitute values in a single pass. Values are never re-parsed."""
        out = []
        for part in self._parts:
            if isinstance(part, _Field):
                if values.get(part.name) is None:
                    raise TemplateError(f"no value for .{part.name}")
                out.append(str(values[part.name]))
            else:
                out.append(part)
        return ''.join(out)


def render_commit_message(template: str, ticket: str, message: str) -> str:
    """Render ``template`` with Ticket and Message."""
    return CommitTemplate(template).render(Ticket=ticket, Message=message)
