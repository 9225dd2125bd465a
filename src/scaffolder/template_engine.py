"""Jinja2-backed template engine for scaffold files and destination paths."""

from typing import Any, Mapping

import jinja2

from scaffolder.errors import RenderError, TemplateSyntaxError

TEMPLATE_SUFFIXES = (".tera", ".j2", ".jinja")
_TEMPLATES_PREFIX = "templates/"


def is_template_file(src: str) -> bool:
    """Return True if *src* carries a template suffix and must be rendered."""
    return src.endswith(TEMPLATE_SUFFIXES)


def normalize_template_key(src: str) -> str:
    """Return the lookup key a template is registered and rendered under.

    Strips a single leading ``templates/`` segment if present, so entries
    declared as ``templates/a.tera`` and ``a.tera`` share the key ``a.tera``.
    """
    if src.startswith(_TEMPLATES_PREFIX):
        return src[len(_TEMPLATES_PREFIX):]
    return src


class JinjaTemplateEngine:
    """Holds named templates for one scaffold and renders them.

    Undefined variables raise RenderError rather than rendering empty.
    """

    def __init__(self):
        self._sources = {}
        self._env = jinja2.Environment(
            loader=jinja2.DictLoader(self._sources),
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def register_named(self, key: str, raw_text: str) -> None:
        try:
            self._env.parse(raw_text, name=key)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateSyntaxError(f"Template '{key}' line {e.lineno}: {e.message}") from e
        self._sources[key] = raw_text

    def render_named(self, key: str, context: Mapping[str, Any]) -> str:
        try:
            template = self._env.get_template(key)
        except jinja2.TemplateNotFound as e:
            raise RenderError(f"Template '{key}' is not registered") from e
        return self._render(template, context, f"template '{key}'")

    def render_inline(self, template_string: str, context: Mapping[str, Any]) -> str:
        try:
            template = self._env.from_string(template_string)
        except jinja2.TemplateSyntaxError as e:
            raise RenderError(f"Invalid template '{template_string}': {e.message}") from e
        return self._render(template, context, f"'{template_string}'")

    @staticmethod
    def _render(template, context, label):
        try:
            return template.render(context)
        except jinja2.TemplateError as e:
            raise RenderError(f"Cannot render {label}: {e}") from e
