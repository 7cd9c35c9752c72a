import pytest

from mikroscli.survey import (
    FollowUpSurvey,
    PromptKind,
    Question,
    QuestionCondition,
    Survey,
    survey_from_dict,
    survey_to_dict,
)


def _follow_up_survey():
    return Survey(
        questions=[
            Question(
                name="option-chosen",
                prompt=PromptKind.SELECT,
                message="Select your option:",
                options=["option1", "option2", "option3"],
                default="option2",
            )
        ],
        follow_up=[
            FollowUpSurvey(
                name="address-to-choose",
                condition=QuestionCondition(name="option-chosen", value=["option1", "option3"]),
                survey=Survey(
                    questions=[
                        Question(
                            name="condition1-option1-option3-chosen",
                            prompt=PromptKind.INPUT,
                            message="Enter your address:",
                            default="Nowhere",
                        )
                    ]
                ),
            )
        ],
    )


def test_round_trip():
    survey = _follow_up_survey()
    assert survey_from_dict(survey_to_dict(survey)) == survey


def test_follow_ups_use_sub_survey_key():
    data = survey_to_dict(_follow_up_survey())
    assert data["sub_survey"][0]["name"] == "address-to-choose"


def test_empty_survey_is_empty_object():
    assert survey_to_dict(Survey()) == {}


def test_question_always_carries_flags_and_name():
    data = survey_to_dict(Survey(questions=[Question(name="q", prompt=PromptKind.INPUT)]))
    assert data["questions"] == [
        {"required": False, "confirm_after": False, "prompt": 1, "name": "q"}
    ]


def test_prompt_is_read_as_kind():
    survey = survey_from_dict({"questions": [{"name": "x", "prompt": 5}]})
    assert survey.questions[0].prompt is PromptKind.CONFIRM


def test_confirm_question_without_prompt_is_kept():
    survey = survey_from_dict(
        {"confirm_question": {"message": "again?", "default": "true", "confirm_after": True}}
    )
    assert survey.confirm_question.prompt == 0
    assert survey.confirm_question.default == "true"


def test_confirmation_placement():
    after = Survey(confirm_question=Question(confirm_after=True))
    before = Survey(confirm_question=Question(confirm_after=False))
    none = Survey()

    assert (after.needs_confirmation(), after.confirm_before(), after.confirm_after()) == (
        True, False, True,
    )
    assert (before.needs_confirmation(), before.confirm_before(), before.confirm_after()) == (
        True, True, False,
    )
    assert (none.needs_confirmation(), none.confirm_before(), none.confirm_after()) == (
        False, False, False,
    )


def test_wrong_field_type_raises():
    with pytest.raises(ValueError, match="name"):
        survey_from_dict({"questions": [{"name": 3}]})


def test_options_must_be_strings():
    with pytest.raises(ValueError, match="options"):
        survey_from_dict({"questions": [{"name": "q", "options": [1]}]})


def test_not_an_object_raises():
    with pytest.raises(ValueError):
        survey_from_dict(["nope"])