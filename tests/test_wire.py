import json

import pytest

from mikroscli.wire import PluginData, decode_plugin_data


def test_empty_data_encodes_to_empty_object():
    assert PluginData().to_json() == "{}"


def test_only_set_fields_are_sent():
    data = PluginData(name="database", kind="consumer")
    assert data.to_json() == '{"name":"database","kind":"consumer"}'


def test_empty_answers_are_left_out():
    data = PluginData(answers={})
    assert "answers" not in data.to_dict()


def test_round_trip_keeps_every_field():
    data = PluginData(
        name="database",
        ui_name="nosql database",
        kind="consumer",
        survey={"questions": [{"name": "q", "prompt": 1}]},
        answers={"ttl": 0, "enabled": True},
        template={"new_service_args": "x"},
        error="boom",
    )
    assert decode_plugin_data(data.to_json()) == data


def test_decode_reads_only_the_first_value():
    data = decode_plugin_data('{"name":"a"}\n{"name":"b"}')
    assert data.name == "a"


def test_decode_accepts_leading_whitespace():
    assert decode_plugin_data('\n  {"kind":"consumer"}').kind == "consumer"


def test_decode_ignores_unknown_keys():
    assert decode_plugin_data('{"other": 1, "name": "n"}') == PluginData(name="n")


def test_decode_garbage_raises():
    with pytest.raises(ValueError, match="failed to decode plugin data"):
        decode_plugin_data("garbage")


def test_decode_empty_raises():
    with pytest.raises(ValueError, match="failed to decode plugin data"):
        decode_plugin_data("")


def test_decode_wrong_field_type_raises():
    with pytest.raises(ValueError, match="name"):
        decode_plugin_data('{"name": 42}')


def test_decode_answers_must_be_object():
    with pytest.raises(ValueError, match="answers"):
        decode_plugin_data('{"answers": [1, 2]}')


def test_output_prints_one_json_line(capsys):
    PluginData(ui_name="nosql database").output()
    printed = capsys.readouterr().out
    assert printed.endswith("\n")
    assert json.loads(printed) == {"ui_name": "nosql database"}