"""
HTML rendering of prompt results for the output pane.

Objects render as braces with one child per line. Every other leaf is shown as
a quoted string, which is all the prompt schema ever produces. Null and boolean
leaves show as an empty string.
"""
from typing import Any

from markupsafe import Markup, escape

from reverse_prompt.prompt_schema import is_error_result

PUNCT_CLASS = "json-punct"
KEY_CLASS = "json-key"
STRING_CLASS = "json-string"
ERROR_CLASS = "json-error"


def _span(css_class: str, text: str) -> Markup:
    return Markup('<span class="{}">{}</span>').format(css_class, text)


def _leaf_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    return str(value)


def render_json(value: Any) -> Markup:
    if isinstance(value, list):
        value = {str(index): item for index, item in enumerate(value)}

    if not isinstance(value, dict):
        return _span(STRING_CLASS, f'"{_leaf_text(value)}"')

    entries = list(value.items())
    children = []
    for index, (key, child) in enumerate(entries):
        line = _span(KEY_CLASS, f'"{key}"') + _span(PUNCT_CLASS, ": ") + render_json(child)
        if index < len(entries) - 1:
            line += _span(PUNCT_CLASS, ",")
        children.append(Markup('<div class="json-entry">{}</div>').format(line))

    opening = _span(PUNCT_CLASS, "{")
    if entries:
        opening += Markup("\n")
    return Markup("<span>{}{}{}</span>").format(opening, Markup("").join(children), _span(PUNCT_CLASS, "}"))


def render_result(result: Any) -> Markup:
    """Renders a session result, showing an error result as its message alone."""
    if result is None:
        return Markup("")
    if is_error_result(result):
        return _span(ERROR_CLASS, escape(result["error"]))
    return Markup('<code class="json-root">{}</code>').format(render_json(result))
