"""Custom templates a service plugin hands to the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class TemplateFile:
    """A template file with its content, output name and own context."""

    content: str = ""
    name: str = ""
    output: str = ""
    extension: str = ""
    context: Any = None


@dataclass
class Template:
    """Extra template content for a new service of a plugin's kind."""

    new_service_args: str = ""
    with_external_features_arg: str = ""
    with_external_services_arg: str = ""
    templates: list[TemplateFile | None] = field(default_factory=list)


_FILE_TEXT = ("content", "name", "output", "extension")
_TEMPLATE_TEXT = ("new_service_args", "with_external_features_arg", "with_external_services_arg")


def _text(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"template: '{where}{key}' must be a string")
    return value


def _file_from_dict(data: Any, index: int) -> TemplateFile | None:
    if data is None:
        return None
    where = f"templates[{index}]."
    if not isinstance(data, dict):
        raise ValueError(f"template: '{where[:-1]}' must be an object")
    return TemplateFile(
        **{key: _text(data, key, where) for key in _FILE_TEXT}, context=data.get("context")
    )


def template_from_dict(data: dict[str, Any]) -> Template:
    """Build a template from its decoded JSON form. Raises ValueError."""
    if not isinstance(data, dict):
        raise ValueError("template: must be an object")
    files = data.get("templates") or []
    if not isinstance(files, list):
        raise ValueError("template: 'templates' must be a list")
    return Template(
        **{key: _text(data, key, "") for key in _TEMPLATE_TEXT},
        templates=[_file_from_dict(item, i) for i, item in enumerate(files)],
    )


def _file_to_dict(file: TemplateFile | None) -> dict[str, Any] | None:
    if file is None:
        return None
    out: dict[str, Any] = {key: getattr(file, key) for key in _FILE_TEXT if getattr(file, key)}
    if file.context is not None:
        out["context"] = file.context
    return out


def template_to_dict(template: Template) -> dict[str, Any]:
    """Return the JSON form of a template, leaving out empty fields."""
    out: dict[str, Any] = {
        key: getattr(template, key) for key in _TEMPLATE_TEXT if getattr(template, key)
    }
    if template.templates:
        out["templates"] = [_file_to_dict(f) for f in template.templates]
    return out