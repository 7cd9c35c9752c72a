from dataclasses import dataclass

import pytest

from mikroscli.templating import (
    LoadOptions,
    TemplateData,
    TemplateFile,
    new_session_from_data,
    new_session_from_files,
    parse_block,
    to_camel,
    to_kebab,
    to_screaming_snake,
    to_snake,
)

WORDS = ["JSONData", "AnyKind of_string", "topic_name", "userID", "my-service.name"]


def test_to_snake_splits_acronyms():
    assert to_snake("JSONData") == "json_data"


def test_to_camel_joins_words():
    assert to_camel("AnyKind of_string") == "AnyKindOfString"


@pytest.mark.parametrize("text", WORDS)
def test_screaming_snake_is_upper_snake(text):
    assert to_screaming_snake(text) == to_snake(text).upper()


@pytest.mark.parametrize("text", WORDS)
def test_kebab_uses_hyphens(text):
    assert to_kebab(text) == to_snake(text).replace("_", "-")


@pytest.mark.parametrize("text", ["TopicName", "UserCreated", "Order"])
def test_camel_snake_round_trip(text):
    assert to_camel(to_snake(text)) == text


def _assets(tmp_path, files):
    folder = tmp_path / "assets"
    folder.mkdir()
    for name, content in files.items():
        (folder / name).write_text(content)
    return tmp_path


def test_session_from_files_renders_wanted(tmp_path):
    base = _assets(tmp_path, {
        "main.tmpl": "package {{ ServiceName }}\n",
        "unused.tmpl": "{{ nothing }}",
    })
    options = LoadOptions(templates_to_use=[TemplateFile(name="main", extension="go")],
                          files_base_path="assets")
    generated = new_session_from_files(options, base).execute_templates({"ServiceName": "svc"})
    assert [(g.filename, g.content) for g in generated] == [("main.go", "package svc\n")]


def test_output_name_and_template_name(tmp_path):
    base = _assets(tmp_path, {"protobuf_api.tmpl": "{{ templateName() }}"})
    spec = TemplateFile(name="protobuf_api", output="users_api", extension="proto")
    options = LoadOptions(templates_to_use=[spec], files_base_path="assets")
    generated = new_session_from_files(options, base).execute_templates({})
    assert generated[0].filename == "users_api.proto"
    assert generated[0].content == "protobuf_api"


def test_custom_api_functions(tmp_path):
    base = _assets(tmp_path, {"README.md.tmpl": "{{ shout(ServiceName) }}-{{ ServiceName|toSnake }}"})
    options = LoadOptions(templates_to_use=[TemplateFile(name="README.md")],
                          api={"shout": str.upper}, files_base_path="assets")
    generated = new_session_from_files(options, base).execute_templates({"ServiceName": "MyService"})
    assert generated[0].filename == "README.md"
    assert generated[0].content == "MYSERVICE-" + to_snake("MyService")


def test_syntax_error_is_reported(tmp_path):
    base = _assets(tmp_path, {"main.tmpl": "{{ broken "})
    options = LoadOptions(templates_to_use=[TemplateFile(name="main")], files_base_path="assets")
    with pytest.raises(ValueError, match="parsing template"):
        new_session_from_files(options, base)


def test_missing_directory(tmp_path):
    options = LoadOptions(templates_to_use=[TemplateFile(name="main")], files_base_path="nowhere")
    with pytest.raises(OSError, match="reading files"):
        new_session_from_files(options, tmp_path)


def test_missing_variable_fails(tmp_path):
    base = _assets(tmp_path, {"main.tmpl": "{{ Missing }}"})
    options = LoadOptions(templates_to_use=[TemplateFile(name="main")], files_base_path="assets")
    session = new_session_from_files(options, base)
    with pytest.raises(ValueError, match="executing template"):
        session.execute_templates({})


def test_session_from_data_uses_own_context():
    options = LoadOptions(templates_to_use=[TemplateFile(output="user_created", extension="go")])
    files = [
        TemplateData(file_name="user_created", content="{{ data.EventName }}",
                     context={"EventName": "UserCreated"}),
        TemplateData(file_name="other", content="{{ x }}"),
    ]
    session = new_session_from_data(options, files)
    assert len(session) == 1
    generated = session.execute_templates(None)
    assert [(g.filename, g.content) for g in generated] == [("user_created.go", "UserCreated")]


def test_session_context_overrides_own():
    options = LoadOptions(templates_to_use=[TemplateFile(name="event")])
    files = [TemplateData(file_name="event.tmpl", content=b"{{ EventName }}",
                          context={"EventName": "A"})]
    generated = new_session_from_data(options, files).execute_templates({"EventName": "B"})
    assert generated[0].content == "B"


@dataclass
class _Context:
    ServiceName: str

    def is_grpc_service(self):
        return True


def test_object_context_exposes_attributes_and_methods():
    out = parse_block("{{ ServiceName }}:{{ is_grpc_service() }}", None, _Context("users"))
    assert out == "users:True"


def test_parse_block_default_and_custom_functions():
    data = {"ServiceName": "MyService", "p": "a/b/c"}
    assert parse_block("{{ toSnake(ServiceName) }}", None, data) == to_snake("MyService")
    assert parse_block("{{ basename(p) }}", None, data) == "c"
    assert parse_block("{{ twice(ServiceName) }}", {"twice": lambda s: s * 2}, data) == "MyService" * 2


def test_parse_block_keeps_trailing_newline():
    assert parse_block("x\n", None, {}) == "x\n"


def test_parse_block_syntax_error():
    with pytest.raises(ValueError, match="parsing template"):
        parse_block("{% if %}", None, {})