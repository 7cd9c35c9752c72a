"""The JSON message a plugin prints for the CLI to read."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any

_DECODER = json.JSONDecoder()
_TEXT_FIELDS = ("name", "ui_name", "kind", "error")


@dataclass
class PluginData:
    """Everything a plugin may answer with. Empty fields are not sent."""

    name: str = ""
    ui_name: str = ""
    kind: str = ""
    survey: Any = None
    answers: dict[str, Any] | None = None
    template: Any = None
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form, leaving out empty fields."""
        out: dict[str, Any] = {}
        if self.name:
            out["name"] = self.name
        if self.ui_name:
            out["ui_name"] = self.ui_name
        if self.kind:
            out["kind"] = self.kind
        if self.survey is not None:
            out["survey"] = self.survey
        if self.answers:
            out["answers"] = self.answers
        if self.template is not None:
            out["template"] = self.template
        if self.error:
            out["error"] = self.error
        return out

    def to_json(self) -> str:
        """Return the compact JSON text of the message."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    def output(self) -> None:
        """Write the message as one line on standard output and flush it."""
        text = self.to_json()
        stream = sys.stdout
        stream.write(text)
        stream.write("\n")
        stream.flush()


def _fail(reason: str) -> ValueError:
    return ValueError(f"failed to decode plugin data: {reason}")


def decode_plugin_data(text: str) -> PluginData:
    """Decode the first JSON value in text as plugin data.

    Anything after that value is ignored. Raises ValueError on bad input.
    """
    try:
        value, _ = _DECODER.raw_decode(text.lstrip())
    except json.JSONDecodeError as exc:
        raise _fail(str(exc)) from exc

    data = PluginData()
    if value is None:
        return data
    if not isinstance(value, dict):
        raise _fail("expected a JSON object")

    for key in _TEXT_FIELDS:
        item = value.get(key)
        if item is None:
            continue
        if not isinstance(item, str):
            raise _fail(f"field '{key}' must be a string")
        setattr(data, key, item)

    answers = value.get("answers")
    if answers is not None and not isinstance(answers, dict):
        raise _fail("field 'answers' must be an object")
    data.answers = answers
    data.survey = value.get("survey")
    data.template = value.get("template")
    return data