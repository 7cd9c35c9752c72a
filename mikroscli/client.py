"""Talking to plugin programs from the CLI side."""

from __future__ import annotations

import json
import os
import subprocess
from typing import Any

from mikroscli import wire
from mikroscli.plugin_template import Template, template_from_dict
from mikroscli.survey import Survey, survey_from_dict


class PluginError(RuntimeError):
    """A plugin failed or answered with data that could not be understood."""


def _encode_answers(answers: dict[str, Any] | None) -> str:
    return json.dumps(answers, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


class _PluginProcess:
    _failure_prefix = ""

    def __init__(self, path: str, name: str) -> None:
        self.name = os.path.join(path, name)

    def _exec(self, *args: str) -> str:
        try:
            proc = subprocess.run(
                [self.name, *args],
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError:
            out, ok = "", False
        else:
            out = proc.stdout.decode("utf-8", errors="replace")
            ok = proc.returncode == 0

        if ok:
            return out

        # A failing plugin reports its error on stdout.
        try:
            data = wire.decode_plugin_data(out)
        except ValueError as exc:
            raise PluginError(f"{self._failure_prefix}{exc}") from exc
        raise PluginError(data.error)

    def _call(self, *args: str) -> wire.PluginData:
        out = self._exec(*args)
        try:
            return wire.decode_plugin_data(out)
        except ValueError as exc:
            raise PluginError(str(exc)) from exc

    def _survey(self) -> Survey | None:
        data = self._call("-s")
        if not data.survey:
            return None
        try:
            return survey_from_dict(data.survey)
        except ValueError as exc:
            raise PluginError(str(exc)) from exc

    def _validate(self, answers: dict[str, Any] | None) -> dict[str, Any] | None:
        data = self._call("-v", "-i", _encode_answers(answers))
        return data.answers or None


class FeaturePlugin(_PluginProcess):
    """A feature plugin program."""

    def get_name(self) -> str:
        """Return the feature name used by the framework."""
        return self._call("-n").name

    def get_ui_name(self) -> str:
        """Return the feature name shown to the user."""
        return self._call("-u").ui_name

    def get_survey(self) -> Survey | None:
        """Return the feature survey, or None if it has none."""
        return self._survey()

    def validate_answers(self, answers: dict[str, Any] | None) -> dict[str, Any] | None:
        """Have the plugin check the answers; return its definitions or None."""
        return self._validate(answers)


class ServicePlugin(_PluginProcess):
    """A service plugin program."""

    _failure_prefix = "error running service plugin: "

    def get_kind(self) -> str:
        """Return the service kind the plugin provides."""
        return self._call("-k").kind

    def get_survey(self) -> Survey | None:
        """Return the service survey, or None if it has none."""
        return self._survey()

    def validate_answers(self, answers: dict[str, Any] | None) -> dict[str, Any] | None:
        """Have the plugin check the answers; return its definitions or None."""
        return self._validate(answers)

    def get_templates(self, answers: dict[str, Any] | None) -> Template | None:
        """Return the plugin's custom templates for these answers, or None."""
        try:
            encoded = _encode_answers(answers)
        except (TypeError, ValueError) as exc:
            raise PluginError(f"error marshaling answers: {exc}") from exc
        data = self._call("-t", "-i", encoded)
        if not data.template:
            return None
        try:
            return template_from_dict(data.template)
        except ValueError as exc:
            raise PluginError(str(exc)) from exc