import os
import sys

import pytest

from mikroscli.client import FeaturePlugin, PluginError, ServicePlugin
from mikroscli.plugin_template import TemplateFile
from mikroscli.survey import PromptKind

FEATURE_BODY = """
import json, sys
args = sys.argv[1:]
if args[0] == "-n":
    print(json.dumps({"name": "database"}))
elif args[0] == "-u":
    print(json.dumps({"ui_name": "nosql database"}))
elif args[0] == "-s":
    print(json.dumps({"survey": {"questions": [
        {"name": "database_kind", "prompt": 2, "options": ["mongo", "sqlite"],
         "required": False, "confirm_after": False}]}}))
elif args[0] == "-v":
    print(json.dumps({"answers": {"received": json.loads(args[2])}}))
"""

SERVICE_BODY = """
import json, sys
args = sys.argv[1:]
if args[0] == "-k":
    print(json.dumps({"kind": "consumer"}))
elif args[0] == "-s":
    print(json.dumps({"survey": {"confirm_question": {
        "message": "Do you want to add another event?", "default": "true",
        "confirm_after": True, "required": False, "prompt": 0, "name": ""}}}))
elif args[0] == "-v":
    print(json.dumps({}))
elif args[0] == "-t":
    answers = json.loads(args[2])
    print(json.dumps({"template": {"new_service_args": "args",
        "templates": [{"name": "event", "extension": "go", "context": answers}]}}))
"""

EMPTY_BODY = """
print("{}")
"""

ERROR_BODY = """
import json, sys
print(json.dumps({"error": "boom"}))
sys.exit(1)
"""

GARBAGE_BODY = """
import sys
print("garbage")
sys.exit(2)
"""


def make_plugin(directory, name, body):
    path = directory / name
    path.write_text(f"#!{sys.executable}\n{body}")
    os.chmod(path, 0o755)
    return path


def test_feature_names(tmp_path):
    make_plugin(tmp_path, "db", FEATURE_BODY)
    plugin = FeaturePlugin(str(tmp_path), "db")
    assert plugin.name == str(tmp_path / "db")
    assert plugin.get_name() == "database"
    assert plugin.get_ui_name() == "nosql database"


def test_feature_survey(tmp_path):
    make_plugin(tmp_path, "db", FEATURE_BODY)
    survey = FeaturePlugin(str(tmp_path), "db").get_survey()
    assert survey.questions[0].name == "database_kind"
    assert survey.questions[0].prompt is PromptKind.SELECT
    assert survey.questions[0].options == ["mongo", "sqlite"]


def test_feature_validate_answers_sends_input(tmp_path):
    make_plugin(tmp_path, "db", FEATURE_BODY)
    answers = {"database_kind": "mongo", "database_cache": True}
    result = FeaturePlugin(str(tmp_path), "db").validate_answers(answers)
    assert result == {"received": answers}


def test_missing_survey_and_answers_are_none(tmp_path):
    make_plugin(tmp_path, "empty", EMPTY_BODY)
    feature = FeaturePlugin(str(tmp_path), "empty")
    assert feature.get_survey() is None
    assert feature.validate_answers({"a": "b"}) is None


def test_service_kind_and_survey(tmp_path):
    make_plugin(tmp_path, "consumer", SERVICE_BODY)
    service = ServicePlugin(str(tmp_path), "consumer")
    assert service.get_kind() == "consumer"
    survey = service.get_survey()
    assert survey.confirm_after()
    assert survey.confirm_question.message == "Do you want to add another event?"


def test_service_empty_answers_are_none(tmp_path):
    make_plugin(tmp_path, "consumer", SERVICE_BODY)
    assert ServicePlugin(str(tmp_path), "consumer").validate_answers({"x": "y"}) is None


def test_service_templates(tmp_path):
    make_plugin(tmp_path, "consumer", SERVICE_BODY)
    answers = {"topic_name": "user_created"}
    template = ServicePlugin(str(tmp_path), "consumer").get_templates(answers)
    assert template.new_service_args == "args"
    assert template.templates == [TemplateFile(name="event", extension="go", context=answers)]


def test_service_without_templates(tmp_path):
    make_plugin(tmp_path, "empty", EMPTY_BODY)
    assert ServicePlugin(str(tmp_path), "empty").get_templates({}) is None


def test_plugin_error_is_reported(tmp_path):
    make_plugin(tmp_path, "bad", ERROR_BODY)
    with pytest.raises(PluginError, match="^boom$"):
        FeaturePlugin(str(tmp_path), "bad").get_name()
    with pytest.raises(PluginError, match="^boom$"):
        ServicePlugin(str(tmp_path), "bad").get_kind()


def test_feature_garbage_failure(tmp_path):
    make_plugin(tmp_path, "junk", GARBAGE_BODY)
    with pytest.raises(PluginError, match="^failed to decode plugin data"):
        FeaturePlugin(str(tmp_path), "junk").get_ui_name()


def test_service_garbage_failure(tmp_path):
    make_plugin(tmp_path, "junk", GARBAGE_BODY)
    with pytest.raises(PluginError, match="^error running service plugin"):
        ServicePlugin(str(tmp_path), "junk").get_kind()


def test_missing_program(tmp_path):
    with pytest.raises(PluginError, match="error running service plugin"):
        ServicePlugin(str(tmp_path), "absent").get_kind()