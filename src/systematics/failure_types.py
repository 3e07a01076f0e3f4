"""Failure categories and their message templates.

A failure type is anything with a ``title`` and a ``template``. Templates use
positional ``str.format`` placeholders (``{0}``, ``{1}``, or automatic ``{}``),
filled left to right by the arguments given to the factory functions.
"""

from __future__ import annotations

from enum import Enum
from functools import cache
import string
from typing import Any, Protocol, runtime_checkable

from systematics.config import current_config
from systematics.errors import TemplateError

_FORMATTER = string.Formatter()


@runtime_checkable
class FailureType(Protocol):
    """A named category of failure with a message template."""

    @property
    def title(self) -> str: ...  # noqa: D102

    @property
    def template(self) -> str: ...  # noqa: D102


class TemplatedFailureType:
    """Base for failure type enumerations; derives ``parameter_count``.

    Mix in ahead of ``Enum`` on any enumeration exposing ``title`` and
    ``template``, as ``BasicFailureType`` does.
    """

    @property
    def parameter_count(self) -> int:
        """Number of positional arguments ``template`` consumes."""
        return parameter_count(self.template)  # type: ignore[attr-defined]


class BasicFailureType(TemplatedFailureType, Enum):
    """Default failure types used when no other type is specified."""

    GENERIC = ("generic-failure", "")
    CATASTROPHIC = ("catastrophic-failure", "")

    def __init__(self, title: str, template: str) -> None:
        self._title = title
        self._template = template

    @property
    def title(self) -> str:
        return self._title

    @property
    def template(self) -> str:
        return self._template


# --- Templates ---


_Chunk = tuple[str, int | None, str, str | None, str]


@cache
def _fields(template: str) -> tuple[_Chunk, ...]:
    """Split a template into (literal, index, spec, conversion, name) chunks.

    ``index`` is None for a trailing literal with no field after it. Automatic
    numbering is resolved to explicit indices here; ``name`` keeps the field
    as written.
    """
    try:
        parsed = list(_FORMATTER.parse(template))
    except ValueError as e:
        raise TemplateError(
            f"Malformed failure template {template!r}: {e}", template=template
        ) from e

    chunks: list[_Chunk] = []
    auto = 0
    explicit = False
    for literal, field_name, spec, conversion in parsed:
        if field_name is None:
            chunks.append((literal, None, "", None, ""))
            continue
        if field_name == "":
            if explicit:
                raise TemplateError(
                    f"Template {template!r} mixes automatic and numbered placeholders",
                    template=template,
                )
            index = auto
            auto += 1
        elif field_name.isdigit():
            if auto:
                raise TemplateError(
                    f"Template {template!r} mixes automatic and numbered placeholders",
                    template=template,
                )
            explicit = True
            index = int(field_name)
        else:
            raise TemplateError(
                f"Template {template!r} uses non-positional placeholder {{{field_name}}}",
                hint="Failure templates take positional placeholders only: {0}, {1}, ...",
                template=template,
            )
        if spec and "{" in spec:
            raise TemplateError(
                f"Template {template!r} nests a placeholder inside a format spec",
                hint="Write the width or precision into the template literally.",
                template=template,
            )
        chunks.append((literal, index, spec or "", conversion, field_name))
    return tuple(chunks)


def parameter_count(template: str) -> int:
    """Number of positional arguments the template consumes."""
    indices = [chunk[1] for chunk in _fields(template) if chunk[1] is not None]
    return max(indices) + 1 if indices else 0


def render_template(template: str, *args: Any, strict: bool | None = None) -> str:
    """Substitute ``args`` into ``template`` positionally.

    Args:
        template: Message template with positional placeholders.
        *args: Values for the placeholders, in order.
        strict: Overrides the configured ``template_policy`` when given.

    Returns:
        The rendered message.

    Raises:
        TemplateError: If the template is malformed, or if the policy is strict
            and the argument count differs from the placeholder count.
    """
    chunks = _fields(template)
    if strict is None:
        strict = current_config().strict_templates

    expected = parameter_count(template)
    if strict and len(args) != expected:
        raise TemplateError(
            f"Template {template!r} expects {expected} argument(s), got {len(args)}",
            hint="Pass one argument per placeholder, or set "
            "SYSTEMATICS_TEMPLATE_POLICY=lenient.",
            template=template,
            expected=expected,
            received=len(args),
        )

    out: list[str] = []
    for literal, index, spec, conversion, name in chunks:
        out.append(literal)
        if index is None:
            continue
        if index < len(args):
            try:
                value = _FORMATTER.convert_field(args[index], conversion)
                out.append(_FORMATTER.format_field(value, spec))
            except (ValueError, TypeError) as e:
                raise TemplateError(
                    f"Cannot render placeholder {{{name}}} of {template!r} "
                    f"with {type(args[index]).__name__} argument: {e}",
                    template=template,
                ) from e
        else:
            # Lenient: leave the unfilled placeholder as written
            out.append(_placeholder(name, spec, conversion))
    return "".join(out)


def _placeholder(name: str, spec: str, conversion: str | None) -> str:
    text = name
    if conversion:
        text += f"!{conversion}"
    if spec:
        text += f":{spec}"
    return "{" + text + "}"
