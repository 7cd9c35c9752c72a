"""Answers and template context for creating a new service."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from mikroscli import protobuf
from mikroscli.plugin_template import Template
from mikroscli.templating import TemplateFile, parse_block, to_camel, to_snake

_DEFAULT_VERSION = "v0.1.0"


class ServiceType(str, Enum):
    """Service types the framework supports without plugins."""

    GRPC = "grpc"
    HTTP = "http"
    HTTP_SPEC = "http-spec"
    SCRIPT = "script"
    WORKER = "worker"

    def __str__(self) -> str:
        return self.value


_CORE_TYPES = frozenset(t.value for t in ServiceType)


@dataclass
class AnswerDefinitions:
    """Definitions that a survey produced for 'service.toml'."""

    definitions: Any = None

    def should_be_saved(self) -> bool:
        """Return True if there is something to write."""
        return self.definitions is not None


@dataclass
class SurveyAnswers:
    """The user's choices for a new service."""

    name: str = ""
    type: str = ""
    language: str = ""
    version: str = _DEFAULT_VERSION
    product: str = ""
    features: list[str] = field(default_factory=list)
    lifecycle: list[str] = field(default_factory=list)
    http_type: str = ""
    service_answers: dict[str, Any] | None = None
    feature_definitions: dict[str, AnswerDefinitions] = field(default_factory=dict)
    service_definitions: AnswerDefinitions | None = None

    def template_names(self) -> list[TemplateFile]:
        """Return the templates a new service is generated from."""
        names = [
            TemplateFile(name="main", extension="go"),
            TemplateFile(name="service", extension="go"),
            TemplateFile(name="README", extension="md"),
        ]
        if self.lifecycle:
            names.append(TemplateFile(name="lifecycle", extension="go"))
        return names

    def add_feature_definitions(self, name: str, answers: Any) -> None:
        """Keep the definitions produced by a feature's survey."""
        self.feature_definitions[name] = AnswerDefinitions(answers)

    def set_service_definitions(self, answers: Any) -> None:
        """Keep the definitions produced by the service type's survey."""
        self.service_definitions = AnswerDefinitions(answers)

    def service_type(self) -> str:
        """Return the effective service type; HTTP resolves to its subtype."""
        if self.type == ServiceType.HTTP.value:
            return self.http_type
        return self.type


def new_survey_answers(proto_filename: str = "") -> SurveyAnswers:
    """Return answers with defaults, named after the proto file's package if given."""
    answers = SurveyAnswers()
    if proto_filename:
        answers.name = protobuf.parse(proto_filename).service_name
    return answers


@dataclass
class ImportContext:
    """An import path with an optional alias."""

    path: str
    alias: str = ""


@dataclass
class TemplateContext:
    """The data the service templates are rendered with."""

    features_extensions: bool = False
    services_extensions: bool = False
    on_start_lifecycle: bool = False
    on_finish_lifecycle: bool = False
    service_type: str = ""
    external_features_arg: str = ""
    external_services_arg: str = ""
    new_service_args: str = ""
    service_name: str = ""
    grpc_methods: list[Any] = field(default_factory=list)
    imports: dict[str, list[ImportContext]] = field(default_factory=dict)
    service_type_custom_answers: Any = None
    plugin_data: Any = None

    def is_script_service(self) -> bool:
        """Return True for a script service."""
        return self.service_type == ServiceType.SCRIPT.value

    def is_worker_service(self) -> bool:
        """Return True for a worker service."""
        return self.service_type == ServiceType.WORKER.value

    def is_grpc_service(self) -> bool:
        """Return True for a gRPC service."""
        return self.service_type == ServiceType.GRPC.value

    def is_http_service(self) -> bool:
        """Return True for a standard library HTTP service."""
        return self.service_type == ServiceType.HTTP.value

    def is_http_spec_service(self) -> bool:
        """Return True for a protobuf spec HTTP service."""
        return self.service_type == ServiceType.HTTP_SPEC.value

    def has_grpc_methods(self) -> bool:
        """Return True if gRPC methods were loaded from a proto file."""
        return len(self.grpc_methods) > 0

    def has_features_extensions(self) -> bool:
        """Return True if the service uses plugin features."""
        return self.features_extensions

    def has_services_extensions(self) -> bool:
        """Return True if the service type comes from a plugin."""
        return self.services_extensions

    def get_template_imports(self, template_name: str) -> list[ImportContext]:
        """Return the imports of one template."""
        return self.imports.get(template_name, [])

    def has_on_start(self) -> bool:
        """Return True if the OnStart lifecycle event is handled."""
        return self.on_start_lifecycle

    def has_on_finish(self) -> bool:
        """Return True if the OnFinish lifecycle event is handled."""
        return self.on_finish_lifecycle


def generate_imports(answers: SurveyAnswers) -> dict[str, list[ImportContext]]:
    """Return the imports each generated source file needs."""
    imports: dict[str, list[ImportContext]] = {
        "main": [
            ImportContext("github.com/mikros-dev/mikros"),
            ImportContext("github.com/mikros-dev/mikros/components/options"),
        ],
        "service": [
            ImportContext("github.com/mikros-dev/mikros/apis/features/logger", "logger_api"),
            ImportContext("github.com/mikros-dev/mikros/apis/features/errors", "errors_api"),
        ],
    }
    if answers.lifecycle:
        imports.setdefault("lifecycle", []).append(ImportContext("context"))
    if answers.http_type == ServiceType.HTTP.value:
        imports.setdefault("http", []).extend(
            [ImportContext("net/http"), ImportContext("context")]
        )
    return imports


def _definitions(answers: SurveyAnswers) -> Any:
    defs = answers.service_definitions
    return defs.definitions if defs is not None else None


def _external_template_init_block(
    answers: SurveyAnswers, external_template: Template | None
) -> str:
    if external_template is None or not external_template.new_service_args:
        return ""
    # The name and type are handed over swapped, as plugins expect.
    data = {
        "ServiceName": answers.type,
        "ServiceType": answers.name,
        "ServiceTypeCustomAnswers": _definitions(answers),
    }
    try:
        return parse_block(external_template.new_service_args, None, data)
    except ValueError as exc:
        raise ValueError(f"failed to parse external template: {exc}") from exc


def generate_new_service_args(
    answers: SurveyAnswers, external_template: Template | None = None
) -> str:
    """Return the service options block of the generated main file."""
    svc_snake = to_snake(answers.name)
    kind = answers.service_type()

    if kind == ServiceType.GRPC.value:
        block = (
            '"grpc": &options.GrpcServiceOptions{\n'
            f"\t\t\t\tProtoServiceDescription: &{svc_snake}pb."
            f"{to_camel(answers.name)}Service_ServiceDesc,\n"
            "\t\t\t},"
        )
    elif kind == ServiceType.HTTP_SPEC.value:
        block = (
            '"http-spec": &options.HTTPSpecServiceOptions{\n'
            f"\t\t\t\tProtoHttpServer: {svc_snake}pb.NewHttpServer(),\n"
            "\t\t\t},"
        )
    elif kind == ServiceType.HTTP.value:
        block = '"http": &options.HTTPServiceOptions{},'
    elif kind == ServiceType.WORKER.value:
        block = '"worker": &options.WorkerServiceOptions{},'
    elif kind == ServiceType.SCRIPT.value:
        block = '"script": &options.ScriptServiceOptions{},'
    else:
        block = _external_template_init_block(answers, external_template)

    return f"Service: map[string]options.ServiceOptions{{\n\t\t\t{block}\n\t\t}},"


def _generate_template_context(
    answers: SurveyAnswers,
    external_template: Template | None = None,
    grpc_methods: Sequence[Any] = (),
) -> TemplateContext:
    context = TemplateContext(
        features_extensions=len(answers.features) > 0,
        services_extensions=answers.type not in _CORE_TYPES,
        on_start_lifecycle="OnStart" in answers.lifecycle,
        on_finish_lifecycle="OnFinish" in answers.lifecycle,
        service_type=answers.service_type(),
        new_service_args=generate_new_service_args(answers, external_template),
        service_name=answers.name,
        grpc_methods=list(grpc_methods),
        imports=generate_imports(answers),
        service_type_custom_answers=_definitions(answers),
    )
    if external_template is not None:
        context.external_services_arg = external_template.with_external_services_arg
        context.external_features_arg = external_template.with_external_features_arg
    return context