"""Parser and executor for ``{{.Key}}`` templates.

Grammar::

    template := ( text | action )*
    action   := "{{" ["- "] body [" -"] "}}"
    body     := "." IDENT          substitution marker
              | "/*" ... "*/"      comment, produces nothing

``{{- `` trims whitespace at the end of the preceding text and `` -}}``
trims whitespace at the start of the following text.  Any other body, and
any ``{{`` without a closing ``}}``, is a syntax error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, FrozenSet, List, Mapping, Tuple, Union

from vcd_acctest.errors import TemplateRenderError, TemplateSyntaxError

LEFT_DELIM = "{{"
RIGHT_DELIM = "}}"

_SPACE = " \t\r\n"
_FIELD = re.compile(r"\.([A-Za-z_][A-Za-z0-9_]*)")


@dataclass(frozen=True)
class Field:
    """A ``{{.Key}}`` marker."""

    key: str


Node = Union[str, Field]


def format_value(value: Any) -> str:
    """Render a single value the way the provider's HCL expects it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class Template:
    """A parsed template, ready to execute against any mapping."""

    name: str
    nodes: Tuple[Node, ...]

    @property
    def fields(self) -> FrozenSet[str]:
        """Keys referenced by the template's markers."""
        return frozenset(n.key for n in self.nodes if isinstance(n, Field))

    def execute(self, data: Mapping[str, Any]) -> str:
        """Substitute *data* into the template.

        Raises :class:`TemplateRenderError` naming every key the template
        references that is missing from *data*; nothing is returned in that
        case.
        """
        missing = sorted(key for key in self.fields if key not in data)
        if missing:
            keys = ", ".join(repr(key) for key in missing)
            raise TemplateRenderError(self.name, f"no value for key(s) {keys}")
        parts: List[str] = []
        for node in self.nodes:
            if isinstance(node, Field):
                parts.append(format_value(data[node.key]))
            else:
                parts.append(node)
        return "".join(parts)


def _parse_body(name: str, body: str, offset: int) -> Union[Field, None]:
    stripped = body.strip(_SPACE)
    if stripped.startswith("/*") and stripped.endswith("*/") and len(stripped) >= 4:
        return None
    match = _FIELD.fullmatch(stripped)
    if match is None:
        raise TemplateSyntaxError(
            name, f"unsupported action {LEFT_DELIM}{body}{RIGHT_DELIM} at offset {offset}"
        )
    return Field(match.group(1))


def parse(text: str, name: str = "template") -> Template:
    """Parse *text* into a :class:`Template` named *name*.

    The name only appears in error messages.
    """
    nodes: List[Node] = []
    pos = 0
    trim_left_of_next = False

    while True:
        start = text.find(LEFT_DELIM, pos)
        literal = text[pos:] if start < 0 else text[pos:start]
        if trim_left_of_next:
            literal = literal.lstrip(_SPACE)

        if start < 0:
            if literal:
                nodes.append(literal)
            break

        end = text.find(RIGHT_DELIM, start + len(LEFT_DELIM))
        if end < 0:
            raise TemplateSyntaxError(name, f"unclosed action at offset {start}")
        body = text[start + len(LEFT_DELIM):end]

        if len(body) >= 2 and body[0] == "-" and body[1] in _SPACE:
            literal = literal.rstrip(_SPACE)
            body = body[1:]
        trim_left_of_next = len(body) >= 2 and body[-1] == "-" and body[-2] in _SPACE
        if trim_left_of_next:
            body = body[:-1]

        if literal:
            nodes.append(literal)
        node = _parse_body(name, body, start)
        if node is not None:
            nodes.append(node)
        pos = end + len(RIGHT_DELIM)

    return Template(name=name, nodes=tuple(nodes))
