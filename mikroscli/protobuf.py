"""A small reader for the package and RPCs of a protobuf file."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field


class ProtoParseError(ValueError):
    """The protobuf source could not be parsed."""


@dataclass
class Method:
    """An RPC of a protobuf service."""

    name: str
    input_name: str
    output_name: str


@dataclass
class Proto:
    """The service name and methods found in a protobuf file."""

    service_name: str = ""
    methods: list[Method] = field(default_factory=list)


@dataclass(frozen=True)
class _Lexeme:
    kind: str
    value: str
    line: int


_LEXEME_PATTERN = re.compile(
    r"""
    (?P<space>\s+)
    | (?P<comment>//[^\n]*|/\*.*?\*/)
    | (?P<string>"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*')
    | (?P<ident>\.?[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)
    | (?P<number>[0-9][0-9A-Za-z_.]*)
    | (?P<symbol>[{}()\[\];=<>,:.\-+/])
    """,
    re.VERBOSE | re.DOTALL,
)


def _lex(text: str) -> Iterator[_Lexeme]:
    pos = 0
    line = 1
    while pos < len(text):
        match = _LEXEME_PATTERN.match(text, pos)
        if match is None:
            raise ProtoParseError(f"line {line}: unexpected character {text[pos]!r}")
        kind = match.lastgroup or ""
        value = match.group()
        if kind not in ("space", "comment"):
            yield _Lexeme(kind, value, line)
        line += value.count("\n")
        pos = match.end()


def _expect(stream: Iterator[_Lexeme], what: str, *, value: str | None = None,
            kind: str | None = None) -> _Lexeme:
    lex = next(stream, None)
    if lex is None:
        raise ProtoParseError(f"unexpected end of input, expected {what}")
    if (value is not None and lex.value != value) or (kind is not None and lex.kind != kind):
        raise ProtoParseError(f"line {lex.line}: expected {what}, found {lex.value!r}")
    return lex


def _message_type(stream: Iterator[_Lexeme]) -> str:
    _expect(stream, "'('", value="(")
    lex = _expect(stream, "message type", kind="ident")
    if lex.value == "stream":
        following = _expect(stream, "message type")
        if following.value == ")":
            return lex.value
        if following.kind != "ident":
            raise ProtoParseError(
                f"line {following.line}: expected message type, found {following.value!r}"
            )
        lex = following
    _expect(stream, "')'", value=")")
    return lex.value


def _parse_rpc(stream: Iterator[_Lexeme]) -> Method:
    name = _expect(stream, "rpc name", kind="ident").value
    input_name = _message_type(stream)
    _expect(stream, "'returns'", value="returns")
    output_name = _message_type(stream)
    return Method(name=name, input_name=input_name, output_name=output_name)


def parse_text(text: str) -> Proto:
    """Read the package and every service RPC from protobuf source text."""
    proto = Proto()
    blocks: list[str] = []
    stream = _lex(text)

    for lex in stream:
        if lex.kind == "symbol" and lex.value == "{":
            blocks.append("block")
        elif lex.kind == "symbol" and lex.value == "}":
            if not blocks:
                raise ProtoParseError(f"line {lex.line}: unexpected '}}'")
            blocks.pop()
        elif lex.kind != "ident":
            continue
        elif not blocks and lex.value == "package":
            name = _expect(stream, "package name", kind="ident").value
            _expect(stream, "';'", value=";")
            proto.service_name = name.rsplit(".", 1)[-1]
        elif not blocks and lex.value == "service":
            _expect(stream, "service name", kind="ident")
            _expect(stream, "'{'", value="{")
            blocks.append("service")
        elif blocks and blocks[-1] == "service" and lex.value == "rpc":
            proto.methods.append(_parse_rpc(stream))

    if blocks:
        raise ProtoParseError("unexpected end of input, missing '}'")

    return proto


def parse(filename: str) -> Proto:
    """Parse a protobuf file."""
    with open(filename, encoding="utf-8") as fp:
        text = fp.read()

    try:
        return parse_text(text)
    except ProtoParseError as exc:
        raise ProtoParseError(f"failed to parse {filename}: {exc}") from exc