"""Surveys a plugin asks the CLI to present to the user."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class PromptKind(IntEnum):
    """Supported kinds of prompt."""

    INPUT = 1
    SELECT = 2
    MULTI_SELECT = 3
    MULTILINE = 4
    CONFIRM = 5


@dataclass
class Question:
    """One question of a survey."""

    name: str = ""
    prompt: int = 0
    message: str = ""
    required: bool = False
    confirm_after: bool = False
    default: str = ""
    options: list[str] = field(default_factory=list)


@dataclass
class QuestionCondition:
    """The answer a previous question must have for a follow-up to run."""

    name: str = ""
    value: Any = None


@dataclass
class FollowUpSurvey:
    """A survey that runs only when its condition is met."""

    name: str = ""
    condition: QuestionCondition | None = None
    survey: Survey | None = None


@dataclass
class Survey:
    """Questions to ask, optionally in a loop and with follow-ups."""

    confirm_question: Question | None = None
    questions: list[Question] = field(default_factory=list)
    follow_up: list[FollowUpSurvey] = field(default_factory=list)

    def needs_confirmation(self) -> bool:
        """Return True if the survey has a confirmation question."""
        return self.confirm_question is not None

    def confirm_before(self) -> bool:
        """Return True if confirmation is asked before each round."""
        return self.confirm_question is not None and not self.confirm_question.confirm_after

    def confirm_after(self) -> bool:
        """Return True if confirmation is asked after each round."""
        return self.confirm_question is not None and self.confirm_question.confirm_after


def _get(data: dict[str, Any], key: str, kind: type, default: Any, where: str) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(f"survey: '{where}{key}' must be of type {kind.__name__}")
    return value


def _table(data: Any, where: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"survey: '{where or 'survey'}' must be an object")
    return data


def _prompt(value: int) -> int:
    try:
        return PromptKind(value)
    except ValueError:
        return value


def _question_from_dict(data: Any, where: str) -> Question:
    data = _table(data, where)
    prefix = f"{where}."
    options = _get(data, "options", list, [], prefix)
    if not all(isinstance(option, str) for option in options):
        raise ValueError(f"survey: '{prefix}options' must hold strings")
    return Question(
        name=_get(data, "name", str, "", prefix),
        prompt=_prompt(_get(data, "prompt", int, 0, prefix)),
        message=_get(data, "message", str, "", prefix),
        required=_get(data, "required", bool, False, prefix),
        confirm_after=_get(data, "confirm_after", bool, False, prefix),
        default=_get(data, "default", str, "", prefix),
        options=list(options),
    )


def _follow_up_from_dict(data: Any, where: str) -> FollowUpSurvey:
    data = _table(data, where)
    prefix = f"{where}."
    condition = None
    if data.get("condition") is not None:
        cond = _table(data["condition"], f"{prefix}condition")
        condition = QuestionCondition(
            name=_get(cond, "name", str, "", f"{prefix}condition."),
            value=cond.get("value"),
        )
    survey = None
    if data.get("survey") is not None:
        survey = _survey_from_dict(data["survey"], f"{prefix}survey")
    return FollowUpSurvey(
        name=_get(data, "name", str, "", prefix), condition=condition, survey=survey
    )


def _survey_from_dict(data: Any, where: str) -> Survey:
    data = _table(data, where)
    prefix = f"{where}." if where else ""
    confirm = None
    if data.get("confirm_question") is not None:
        confirm = _question_from_dict(data["confirm_question"], f"{prefix}confirm_question")
    questions = _get(data, "questions", list, [], prefix)
    follow_up = _get(data, "sub_survey", list, [], prefix)
    return Survey(
        confirm_question=confirm,
        questions=[
            _question_from_dict(q, f"{prefix}questions[{i}]") for i, q in enumerate(questions)
        ],
        follow_up=[
            _follow_up_from_dict(f, f"{prefix}sub_survey[{i}]") for i, f in enumerate(follow_up)
        ],
    )


def survey_from_dict(data: dict[str, Any]) -> Survey:
    """Build a survey from its decoded JSON form. Raises ValueError."""
    return _survey_from_dict(data, "")


def _question_to_dict(question: Question) -> dict[str, Any]:
    out: dict[str, Any] = {
        "required": question.required,
        "confirm_after": question.confirm_after,
        "prompt": int(question.prompt),
    }
    if question.message:
        out["message"] = question.message
    out["name"] = question.name
    if question.default:
        out["default"] = question.default
    if question.options:
        out["options"] = list(question.options)
    return out


def _follow_up_to_dict(follow_up: FollowUpSurvey) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if follow_up.name:
        out["name"] = follow_up.name
    if follow_up.condition is not None:
        cond: dict[str, Any] = {}
        if follow_up.condition.name:
            cond["name"] = follow_up.condition.name
        if follow_up.condition.value is not None:
            cond["value"] = follow_up.condition.value
        out["condition"] = cond
    if follow_up.survey is not None:
        out["survey"] = survey_to_dict(follow_up.survey)
    return out


def survey_to_dict(survey: Survey) -> dict[str, Any]:
    """Return the JSON form of a survey, leaving out empty fields."""
    out: dict[str, Any] = {}
    if survey.confirm_question is not None:
        out["confirm_question"] = _question_to_dict(survey.confirm_question)
    if survey.questions:
        out["questions"] = [_question_to_dict(q) for q in survey.questions]
    if survey.follow_up:
        out["sub_survey"] = [_follow_up_to_dict(f) for f in survey.follow_up]
    return out