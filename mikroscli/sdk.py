"""Building blocks for writing plugin programs for the mikros CLI."""

from __future__ import annotations

import argparse
import json
import sys
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, NoReturn

from mikroscli.encoder import Encoder
from mikroscli.plugin_template import Template, TemplateFile
from mikroscli.survey import (
    FollowUpSurvey,
    PromptKind,
    Question,
    QuestionCondition,
    Survey,
)

__all__ = [
    "Feature",
    "FeatureAPI",
    "FollowUpSurvey",
    "PromptKind",
    "Question",
    "QuestionCondition",
    "Service",
    "ServiceAPI",
    "Survey",
    "Template",
    "TemplateFile",
    "fail",
    "input_to_map",
    "run_feature",
    "run_service",
]

_DECODER = json.JSONDecoder()


class FeatureAPI(ABC):
    """What a feature plugin must provide to be used by the CLI."""

    @abstractmethod
    def name(self) -> str:
        """Return the feature name registered inside the framework."""

    @abstractmethod
    def ui_name(self) -> str:
        """Return the feature name shown to the user."""

    @abstractmethod
    def survey(self) -> Survey | None:
        """Return the survey the user answers to configure the feature."""

    @abstractmethod
    def validate_answers(self, answers: dict[str, Any] | None) -> dict[str, Any] | None:
        """Check the survey answers and return the data for 'service.toml'."""


class ServiceAPI(ABC):
    """What a service plugin must provide to be used by the CLI."""

    @abstractmethod
    def kind(self) -> str:
        """Return the service kind the plugin adds."""

    @abstractmethod
    def survey(self) -> Survey | None:
        """Return the survey the user answers to configure the service."""

    @abstractmethod
    def validate_answers(self, answers: dict[str, Any] | None) -> dict[str, Any] | None:
        """Check the survey answers and return the data for 'service.toml'."""

    @abstractmethod
    def template(self, answers: dict[str, Any] | None) -> Template | None:
        """Return custom templates to generate for a new service."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ValueError(message)


def _parser(flags: Sequence[tuple[str, str]]) -> _ArgumentParser:
    parser = _ArgumentParser(add_help=False)
    for flag, help_text in flags:
        parser.add_argument(f"-{flag}", f"--{flag}", dest=flag, action="store_true",
                            help=help_text)
    parser.add_argument("-i", "--i", dest="i", default="",
                        help="Input values for plugin arguments")
    return parser


def _arguments(argv: Sequence[str] | None) -> list[str]:
    return list(sys.argv[1:] if argv is None else argv)


def input_to_map(text: str) -> dict[str, Any] | None:
    """Decode the JSON object given to a plugin with -i.

    JSON null gives None; anything after the first value is ignored.
    """
    try:
        value, _ = _DECODER.raw_decode(text.lstrip())
    except json.JSONDecodeError as exc:
        raise ValueError(f"{text}: {exc}") from exc

    if value is not None and not isinstance(value, dict):
        raise ValueError(f"{text}: expected a JSON object")
    return value


def _read_input(text: str) -> dict[str, Any] | None:
    if not text:
        raise ValueError("invalid input")
    return input_to_map(text)


class Feature:
    """Runs a feature plugin, answering the CLI's requests."""

    def __init__(self, api: FeatureAPI | None) -> None:
        if api is None:
            raise ValueError("api cannot be nil")
        self._api = api

    def run(self, argv: Sequence[str] | None = None) -> None:
        """Answer the request given on the command line."""
        parser = _parser([
            ("n", "Get plugin name"),
            ("u", "Get UI name"),
            ("s", "Retrieve feature survey questions"),
            ("v", "Validate answers"),
        ])
        args = parser.parse_args(_arguments(argv))
        encoder = Encoder()

        if args.n:
            encoder.set_name(self._api.name())
        elif args.u:
            encoder.set_ui_name(self._api.ui_name())
        elif args.s:
            encoder.set_survey(self._api.survey())
        elif args.v:
            encoder.set_answers(self._api.validate_answers(_read_input(args.i)))
        else:
            raise ValueError("no valid command specified")

        encoder.output()


class Service:
    """Runs a service plugin, answering the CLI's requests."""

    def __init__(self, api: ServiceAPI | None) -> None:
        if api is None:
            raise ValueError("api cannot be nil")
        self._api = api

    def run(self, argv: Sequence[str] | None = None) -> None:
        """Answer the request given on the command line."""
        parser = _parser([
            ("s", "Retrieve feature survey questions"),
            ("v", "Validate answers"),
            ("t", "Retrieve plugin custom templates"),
            ("k", "Get service kind"),
        ])
        args = parser.parse_args(_arguments(argv))
        encoder = Encoder()

        if args.s:
            encoder.set_survey(self._api.survey())
        elif args.v:
            encoder.set_answers(self._api.validate_answers(_read_input(args.i)))
        elif args.t:
            encoder.set_template(self._api.template(_read_input(args.i)))
        elif args.k:
            encoder.set_kind(self._api.kind())
        else:
            raise ValueError("no valid command specified")

        encoder.output()


def fail(error: BaseException | str) -> NoReturn:
    """Report error to the CLI and end the plugin with status 1."""
    encoder = Encoder()
    encoder.set_error(error)
    encoder.output()
    sys.stdout.flush()
    sys.exit(1)


def run_feature(api: FeatureAPI | None) -> None:
    """Run a feature plugin with the process arguments, reporting any failure."""
    try:
        Feature(api).run()
    except Exception as exc:  # every failure goes back to the CLI
        fail(exc)


def run_service(api: ServiceAPI | None) -> None:
    """Run a service plugin with the process arguments, reporting any failure."""
    try:
        Service(api).run()
    except Exception as exc:  # every failure goes back to the CLI
        fail(exc)