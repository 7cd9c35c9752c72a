"""Rendering the template files that make up new projects."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jinja2

_SEPARATORS = " _-."


def _is_upper(ch: str) -> bool:
    return "A" <= ch <= "Z"


def _is_lower(ch: str) -> bool:
    return "a" <= ch <= "z"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def to_camel(text: str) -> str:
    """Return text in UpperCamelCase; runs of capitals are lowered after the first."""
    text = text.strip()
    out: list[str] = []
    cap_next = True
    prev_cap = False

    for i, ch in enumerate(text):
        is_cap = _is_upper(ch)
        is_low = _is_lower(ch)
        if cap_next:
            if is_low:
                ch = ch.upper()
        elif i == 0:
            if is_cap:
                ch = ch.lower()
        elif prev_cap and is_cap:
            ch = ch.lower()
        prev_cap = is_cap

        if is_cap or is_low:
            out.append(ch)
            cap_next = False
        elif _is_digit(ch):
            out.append(ch)
            cap_next = True
        else:
            cap_next = ch in _SEPARATORS

    return "".join(out)


def _delimited(text: str, delimiter: str, screaming: bool) -> str:
    text = text.strip()
    out: list[str] = []

    for i, ch in enumerate(text):
        is_cap = _is_upper(ch)
        is_low = _is_lower(ch)
        if is_low and screaming:
            ch = ch.upper()
        elif is_cap and not screaming:
            ch = ch.lower()

        if i + 1 < len(text):
            nxt = text[i + 1]
            is_num = _is_digit(ch)
            next_cap, next_low, next_num = _is_upper(nxt), _is_lower(nxt), _is_digit(nxt)
            if ((is_cap and (next_low or next_num))
                    or (is_low and (next_cap or next_num))
                    or (is_num and (next_cap or next_low))):
                # An acronym followed by a word ends before its last capital.
                if is_cap and next_low and i > 0 and _is_upper(text[i - 1]):
                    out.append(delimiter)
                out.append(ch)
                if is_low or is_num or next_num:
                    out.append(delimiter)
                continue

        out.append(delimiter if ch in _SEPARATORS else ch)

    return "".join(out)


def to_snake(text: str) -> str:
    """Return text in snake_case."""
    return _delimited(text, "_", screaming=False)


def to_screaming_snake(text: str) -> str:
    """Return text in SCREAMING_SNAKE_CASE."""
    return _delimited(text, "_", screaming=True)


def to_kebab(text: str) -> str:
    """Return text in kebab-case."""
    return _delimited(text, "-", screaming=False)


def _basename(path: str) -> str:
    if path == "":
        return "."
    stripped = path.rstrip("/")
    if stripped == "":
        return "/"
    return stripped.rsplit("/", 1)[-1]


_DEFAULT_API: dict[str, Callable[..., Any]] = {
    "toCamel": to_camel,
    "toSnake": to_snake,
    "toUpperSnake": to_screaming_snake,
    "basename": _basename,
    "toKebab": to_kebab,
}


@dataclass
class TemplateFile:
    """A template to use and the name of the file it becomes."""

    name: str = ""
    output: str = ""
    extension: str = ""

    def filename(self) -> str:
        """Return the generated file's name."""
        base = self.output or self.name
        return f"{base}.{self.extension}" if self.extension else base


@dataclass
class LoadOptions:
    """Which templates to load, where from, and extra template functions."""

    templates_to_use: list[TemplateFile] = field(default_factory=list)
    api: Mapping[str, Callable[..., Any]] | None = None
    files_base_path: str = ""


@dataclass
class TemplateData:
    """Template source given in memory, with its own context."""

    file_name: str
    content: str | bytes
    context: Any = None


@dataclass
class GeneratedTemplate:
    """The rendered content of one template and its file name."""

    filename: str
    content: str


@dataclass
class _Loaded:
    template: jinja2.Template
    file: TemplateFile
    context: Any = None


def _filename_without_extension(filename: str) -> str:
    index = filename.rfind(".")
    return filename[:index] if index >= 0 else filename


def _compile(name: str, text: str, functions: Mapping[str, Callable[..., Any]]) -> jinja2.Template:
    env = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.globals.update(functions)
    env.filters.update(functions)
    try:
        return env.from_string(text)
    except jinja2.TemplateSyntaxError as exc:
        raise ValueError(f"parsing template: {exc}") from exc


def _load_template(name: str, content: str | bytes, options: LoadOptions) -> jinja2.Template:
    functions: dict[str, Callable[..., Any]] = dict(_DEFAULT_API)
    functions["templateName"] = lambda: name
    functions.update(options.api or {})
    text = content.decode("utf-8") if isinstance(content, bytes) else content
    return _compile(name, text, functions)


def _variables(data: Any) -> dict[str, Any]:
    variables: dict[str, Any] = {"data": data}
    if isinstance(data, Mapping):
        variables.update({str(key): value for key, value in data.items()})
    elif data is not None and hasattr(data, "__dict__"):
        for attr in dir(data):
            if not attr.startswith("_"):
                variables[attr] = getattr(data, attr)
    return variables


def _render(template: jinja2.Template, data: Any, name: str) -> str:
    try:
        return template.render(_variables(data))
    except jinja2.TemplateError as exc:
        raise ValueError(f"executing template '{name}': {exc}") from exc


class Session:
    """A set of loaded templates ready to be rendered."""

    def __init__(self, templates: Iterable[_Loaded] = ()) -> None:
        self._templates = list(templates)

    def __len__(self) -> int:
        return len(self._templates)

    def execute_templates(self, context: Any = None) -> list[GeneratedTemplate]:
        """Render every template with context, or each one's own when None."""
        generated = []
        for loaded in self._templates:
            data = loaded.context if context is None else context
            content = _render(loaded.template, data, loaded.file.filename())
            generated.append(GeneratedTemplate(loaded.file.filename(), content))
        return generated


def _find(templates: list[TemplateFile], match: Callable[[TemplateFile], bool]) -> TemplateFile | None:
    return next((t for t in templates if match(t)), None)


def new_session_from_files(options: LoadOptions, directory: str | os.PathLike[str] | Any) -> Session:
    """Load the wanted templates among the files of a directory.

    The files are read from options.files_base_path inside directory, which
    may be a path or a package resource; files not wanted are skipped.
    """
    base = Path(directory) if isinstance(directory, (str, os.PathLike)) else directory
    folder = base.joinpath(options.files_base_path) if options.files_base_path else base

    try:
        entries = sorted(folder.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        raise OSError(f"reading files: {exc}") from exc

    loaded = []
    for entry in entries:
        try:
            data = entry.read_bytes()
        except OSError as exc:
            raise OSError(f"reading file: {exc}") from exc

        name = _filename_without_extension(entry.name)
        wanted = _find(options.templates_to_use, lambda t: t.name == name)
        if wanted is None:
            continue

        loaded.append(_Loaded(_load_template(name, data, options), wanted))

    return Session(loaded)


def new_session_from_data(options: LoadOptions, files: Iterable[TemplateData]) -> Session:
    """Load the wanted templates among sources given in memory."""
    loaded = []
    for file in files:
        name = _filename_without_extension(file.file_name)
        wanted = _find(options.templates_to_use, lambda t: (t.name or t.output) == name)
        if wanted is None:
            continue

        loaded.append(_Loaded(_load_template(name, file.content, options), wanted, file.context))

    return Session(loaded)


def parse_block(block: str, api: Mapping[str, Callable[..., Any]] | None, data: Any) -> str:
    """Render a single block of template text with data."""
    functions = dict(_DEFAULT_API)
    functions.update(api or {})
    return _render(_compile("custom", block, functions), data, "custom")