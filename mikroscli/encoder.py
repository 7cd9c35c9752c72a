"""Building the answer a plugin prints for the CLI."""

from __future__ import annotations

import json
from typing import Any

from mikroscli.plugin_template import Template, template_to_dict
from mikroscli.survey import Survey, survey_to_dict
from mikroscli.wire import PluginData


class Encoder:
    """Collects a plugin's answer and prints it."""

    def __init__(self) -> None:
        self.data = PluginData()

    def _store(self, attr: str, value: Any) -> None:
        try:
            encoded = json.dumps(value)
        except (TypeError, ValueError) as exc:
            self.data.error = str(exc)
            return
        setattr(self.data, attr, json.loads(encoded))

    def set_name(self, name: str) -> None:
        """Set the plugin name."""
        self.data.name = name

    def set_ui_name(self, ui_name: str) -> None:
        """Set the name shown to the user."""
        self.data.ui_name = ui_name

    def set_survey(self, survey: Survey | dict[str, Any] | None) -> None:
        """Set the survey; an unencodable one is reported as the error."""
        if survey is None:
            return
        self._store("survey", survey_to_dict(survey) if isinstance(survey, Survey) else survey)

    def set_answers(self, answers: dict[str, Any] | None) -> None:
        """Set the validated answers."""
        self.data.answers = answers

    def set_template(self, template: Template | dict[str, Any] | None) -> None:
        """Set the custom templates; an unencodable one is reported as the error."""
        if template is None:
            return
        value = template_to_dict(template) if isinstance(template, Template) else template
        self._store("template", value)

    def set_kind(self, kind: str) -> None:
        """Set the service kind."""
        self.data.kind = kind

    def set_error(self, error: BaseException | str) -> None:
        """Set the error message."""
        self.data.error = str(error)

    def output(self) -> None:
        """Print the collected answer."""
        self.data.output()