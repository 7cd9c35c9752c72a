"""Asking the user questions on the terminal and running plugin surveys."""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TextIO

from mikroscli.survey import FollowUpSurvey, PromptKind, Question, Survey

Validator = Callable[[Any], None]
Option = str | tuple[str, str]

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_SUPPORTED_PROMPTS = frozenset(PromptKind)


def _parse_bool(text: str, fallback: bool = False) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return fallback


def is_empty(message: str) -> Callable[[str], None]:
    """Return a validator raising ValueError(message) for an empty string."""

    def check(value: str) -> None:
        if value == "":
            raise ValueError(message)

    return check


def _at_least_one(values: Sequence[str]) -> None:
    if not values:
        raise ValueError("must choose at least one option")


def _pairs(options: Sequence[Option]) -> list[tuple[str, str]]:
    return [(opt, opt) if isinstance(opt, str) else (opt[0], opt[1]) for opt in options]


def _pick(pairs: list[tuple[str, str]], token: str) -> str:
    if token.isdigit() and 1 <= int(token) <= len(pairs):
        return pairs[int(token) - 1][1]
    for label, value in pairs:
        if token in (label, value):
            return value
    raise ValueError(f"invalid choice: {token}")


class Prompter:
    """Asks questions on a text stream and reads the answers from another."""

    def __init__(self, input: TextIO | None = None, output: TextIO | None = None) -> None:
        self._input = input
        self._output = output

    @property
    def _in(self) -> TextIO:
        return self._input if self._input is not None else sys.stdin

    @property
    def _out(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    def _write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()

    def _readline(self) -> str:
        line = self._in.readline()
        if line == "":
            raise EOFError("no more input to read")
        return line.rstrip("\r\n")

    def _until_valid(self, read: Callable[[], Any], validate: Validator | None) -> Any:
        while True:
            try:
                value = read()
                if validate is not None:
                    validate(value)
            except ValueError as exc:
                self._write(f"error: {exc}\n")
                continue
            return value

    def ask(self, title: str, default: str = "", validate: Validator | None = None) -> str:
        """Ask for a line of text; an empty answer gives default."""

        def read() -> str:
            self._write(f"{title} [{default}]: " if default else f"{title}: ")
            answer = self._readline()
            return answer if answer != "" else default

        return self._until_valid(read, validate)

    def choose(self, title: str, options: Sequence[Option], default: str | None = None) -> str:
        """Ask for one of options, given as values or (label, value) pairs."""
        pairs = _pairs(options)
        if not pairs:
            raise ValueError("no options to choose from")
        values = [value for _, value in pairs]
        index = values.index(default) if default in values else 0
        self._write(
            f"{title}\n"
            + "".join(f"  {i}) {label}\n" for i, (label, _) in enumerate(pairs, 1))
        )

        def read() -> str:
            self._write(f"Choice [{index + 1}]: ")
            answer = self._readline().strip()
            if answer == "":
                return values[index]
            return _pick(pairs, answer)

        return self._until_valid(read, None)

    def choose_many(
        self, title: str, options: Sequence[Option], validate: Validator | None = None
    ) -> list[str]:
        """Ask for any number of options, as a comma separated answer."""
        pairs = _pairs(options)
        self._write(
            f"{title}\n"
            + "".join(f"  {i}) {label}\n" for i, (label, _) in enumerate(pairs, 1))
        )

        def read() -> list[str]:
            self._write("Choices (comma separated, empty for none): ")
            answer = self._readline().strip()
            chosen: list[str] = []
            for token in filter(None, (t.strip() for t in answer.split(","))):
                value = _pick(pairs, token)
                if value not in chosen:
                    chosen.append(value)
            return chosen

        return self._until_valid(read, validate)

    def multiline(self, title: str, validate: Validator | None = None) -> str:
        """Ask for several lines of text, ended by an empty line."""

        def read() -> str:
            self._write(f"{title} (finish with an empty line)\n")
            lines: list[str] = []
            while True:
                try:
                    line = self._readline()
                except EOFError:
                    if not lines:
                        raise
                    break
                if line == "":
                    break
                lines.append(line)
            return "\n".join(lines)

        return self._until_valid(read, validate)

    def confirm(self, title: str, default: bool = False) -> bool:
        """Ask a yes or no question; an empty answer gives default."""

        def read() -> bool:
            self._write(f"{title} {'[Y/n]' if default else '[y/N]'}: ")
            answer = self._readline().strip().lower()
            if answer == "":
                return default
            if answer in ("y", "yes", "true"):
                return True
            if answer in ("n", "no", "false"):
                return False
            raise ValueError(f"invalid answer: {answer}")

        return self._until_valid(read, None)

    def show(self, title: str, text: str) -> None:
        """Print a titled note."""
        if title:
            self._write(f"{title}\n")
        self._write(f"{text}\n")


@dataclass
class FormOptions:
    """How survey forms are presented."""

    theme: str = "base"
    accessible: bool = False
    prompter: Prompter | None = None


def _prompter(prompter: Prompter | None) -> Prompter:
    return prompter if prompter is not None else Prompter()


def yes_no(message: str, default: str = "", prompter: Prompter | None = None) -> bool:
    """Ask a confirmation whose default is given as text ('true', 'f', ...)."""
    return _prompter(prompter).confirm(message, _parse_bool(default))


def _ask_question(prompter: Prompter, question: Question, title: str) -> Any:
    kind = question.prompt
    if kind == PromptKind.INPUT:
        validate = is_empty("cannot be empty") if question.required else None
        return prompter.ask(title, question.default, validate)
    if kind == PromptKind.SELECT:
        return prompter.choose(title, question.options, question.default or None)
    if kind == PromptKind.MULTI_SELECT:
        validate = _at_least_one if question.required else None
        return prompter.choose_many(title, question.options, validate)
    if kind == PromptKind.MULTILINE:
        validate = is_empty("cannot be empty") if question.required else None
        return prompter.multiline(title, validate)
    return prompter.confirm(title, _parse_bool(question.default))


def check_follow_up_condition(
    follow_up: FollowUpSurvey, previous_results: Mapping[str, Any]
) -> bool:
    """Return True if the earlier answers meet the follow-up's condition."""
    condition = follow_up.condition
    if condition is None:
        return False

    value = condition.value
    if isinstance(value, str):
        expected = [value]
    elif isinstance(value, list):
        if not all(isinstance(item, str) for item in value):
            raise ValueError("invalid condition value type found")
        expected = value
    else:
        return False

    if condition.name not in previous_results:
        return False
    result = previous_results[condition.name]
    if not isinstance(result, str):
        raise ValueError("invalid result value type found")
    return result in expected


def _execute_follow_ups(
    follow_ups: Sequence[FollowUpSurvey],
    previous_results: Mapping[str, Any],
    options: FormOptions,
) -> dict[str, dict[str, Any]]:
    results: dict[str, dict[str, Any]] = {}
    for follow_up in follow_ups:
        if check_follow_up_condition(follow_up, previous_results):
            results[follow_up.name] = run_form_from_survey(
                follow_up.name, follow_up.survey or Survey(), options
            )
    return results


def _run_survey(name: str, survey: Survey, options: FormOptions) -> dict[str, Any]:
    if any(q.prompt not in _SUPPORTED_PROMPTS for q in survey.questions):
        raise ValueError("unsupported prompt type")

    prompter = _prompter(options.prompter)
    results: dict[str, Any] = {}
    for question in survey.questions:
        title = f"[{name}] {question.message}"
        results[question.name] = _ask_question(prompter, question, title)

    if survey.follow_up:
        results["follow-up"] = _execute_follow_ups(survey.follow_up, results, options)

    return results


def _run_with_confirmation(name: str, survey: Survey, options: FormOptions) -> dict[str, Any]:
    question = survey.confirm_question
    assert question is not None
    before, after = survey.confirm_before(), survey.confirm_after()
    results: list[dict[str, Any]] = []

    while True:
        if before and not yes_no(question.message, question.default, options.prompter):
            break
        results.append(_run_survey(name, survey, options))
        if after and not yes_no(question.message, question.default, options.prompter):
            break

    return {name: results}


def run_form_from_survey(
    name: str, survey: Survey, options: FormOptions | None = None
) -> dict[str, Any]:
    """Ask a survey's questions and return the answers by question name.

    A survey with a confirmation question runs in a loop and returns
    {name: [answers, ...]}.
    """
    options = options if options is not None else FormOptions()
    if survey.needs_confirmation():
        return _run_with_confirmation(name, survey, options)
    return _run_survey(name, survey, options)


def alert(text: str, prompter: Prompter | None = None) -> None:
    """Show text and wait for the user to acknowledge it."""
    _prompter(prompter).ask(f"{text} (press Enter for Ok)")


def message(title: str, text: str, prompter: Prompter | None = None) -> None:
    """Show a titled message."""
    _prompter(prompter).show(title, text + "\n")