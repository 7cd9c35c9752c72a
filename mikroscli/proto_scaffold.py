"""Answers and template context for creating a new protobuf module."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from mikroscli import fs, git
from mikroscli.settings import Profile, Settings
from mikroscli.templating import to_camel, to_snake

_VERSION = "v0.1.0"
_READ_METHODS = frozenset({"get"})


@dataclass
class RPC:
    """A protobuf RPC to generate."""

    is_authenticated: bool = False
    name: str = ""
    http_method: str = ""
    http_endpoint: str = ""
    auth_arg_mode: str = ""
    request_name: str = ""
    response_name: str = ""
    request_body: str = ""
    response_body: str = ""

    def has_body(self) -> bool:
        """Return True if the HTTP method carries a request body."""
        return self.http_method in ("post", "put")


@dataclass
class GrpcAnswers:
    """How a gRPC service is to be generated."""

    entity_name: str = ""
    use_default_rpcs: bool = False
    custom_rpcs: list[str] = field(default_factory=list)


@dataclass
class HTTPAnswers:
    """How an HTTP service is to be generated."""

    is_authenticated: bool = False
    rpcs: list[RPC] = field(default_factory=list)


@dataclass
class Answers:
    """The user's choices for a new protobuf module."""

    service_name: str = ""
    kind: str = ""
    grpc: GrpcAnswers | None = None
    http: HTTPAnswers | None = None


@dataclass
class Context:
    """The data the protobuf module templates are rendered with."""

    http_service: bool = False
    is_authenticated: bool = False
    service_name: str = ""
    version: str = _VERSION
    entity_name: str = ""
    custom_auth_name: str = ""
    rpc_methods: list[RPC] = field(default_factory=list)
    custom_rpcs: list[RPC] = field(default_factory=list)
    main_package_name: str = ""
    repository_name: str = ""
    vcs_project_prefix: str = ""

    def is_http_service(self) -> bool:
        """Return True for an HTTP service."""
        return self.http_service

    def extension(self) -> str:
        """Return the extension of the generated files."""
        return "proto"


def get_auth_arg_mode(method: str) -> str:
    """Return the auth argument mode for an HTTP method.

    Only 'get' reads; every other method writes.
    """
    if method in _READ_METHODS:
        return "READ"
    return "WRITE"


def find_proto_main_project_path(base_path: str, service_name: str) -> str:
    """Return where a service's module goes inside base_path's proto folder.

    The first sub-directory of 'proto' (by name) is the main project.
    Raises FileNotFoundError when there is none.
    """
    proto_dir = os.path.join(base_path, "proto")
    project = next(
        (
            entry
            for entry in sorted(os.listdir(proto_dir))
            if os.path.isdir(os.path.join(proto_dir, entry))
        ),
        None,
    )
    if project is None:
        raise FileNotFoundError("could not find protobuf main project folder")

    return os.path.join(proto_dir, project, to_snake(service_name).lower())


def _templates_base_path(service_name: str) -> str:
    """Return the directory where a new module's files are to be written."""
    repo = git.load_from_cwd()
    cwd = os.getcwd()
    if repo.is_valid_repository():
        base = repo.root_path
    elif fs.find_path(os.path.join(cwd, "proto")):
        base = cwd
    else:
        return cwd

    try:
        return find_proto_main_project_path(base, service_name)
    except OSError:
        return cwd


def project_profile(cfg: Settings, profile_name: str) -> Profile:
    """Return the named profile, or the application one if it is unknown."""
    if profile_name == "default":
        return cfg.app
    return cfg.profile.get(profile_name, cfg.app)


def generate_crud_rpcs(entity_name: str) -> list[RPC]:
    """Return the default get, create, update and delete RPCs of an entity."""
    message_name = to_camel(entity_name)
    field_name = to_snake(entity_name)
    response_body = f"{message_name}Wire {field_name} = 1;"

    return [
        RPC(name=f"Get{message_name}ByID", request_body="string id = 1;",
            response_body=response_body),
        RPC(name=f"Create{message_name}", response_body=response_body),
        RPC(name=f"Update{message_name}ByID", request_body="string id = 1;",
            response_body=response_body),
        RPC(name=f"Delete{message_name}ByID", request_body="string id = 1;",
            response_body=response_body),
    ]


def generate_rpcs(names: list[str]) -> list[RPC]:
    """Return RPCs with request and response messages for each name."""
    rpcs = []
    for name in names:
        message_name = to_camel(name)
        rpcs.append(RPC(
            name=message_name,
            request_name=f"{message_name}Request",
            response_name=f"{message_name}Response",
        ))
    return rpcs


def generate_template_context(cfg: Settings, answers: Answers, profile_name: str) -> Context:
    """Build the template context from the answers and the chosen profile."""
    profile = project_profile(cfg, profile_name)
    is_authenticated = False
    entity_name = ""
    rpcs: list[RPC] = []
    custom_rpcs: list[RPC] = []

    if answers.grpc is not None:
        entity_name = answers.grpc.entity_name
        custom_rpcs = generate_rpcs(answers.grpc.custom_rpcs)
        if answers.grpc.use_default_rpcs:
            rpcs = generate_crud_rpcs(entity_name)

    if answers.http is not None:
        rpcs = answers.http.rpcs
        is_authenticated = answers.http.is_authenticated

    monorepo = profile.project.protobuf_monorepo
    return Context(
        http_service=answers.kind == "http",
        is_authenticated=is_authenticated,
        service_name=answers.service_name,
        version=_VERSION,
        entity_name=entity_name,
        custom_auth_name=profile.project.templates.protobuf.custom_auth_name,
        rpc_methods=rpcs,
        custom_rpcs=custom_rpcs,
        main_package_name=monorepo.project_name,
        repository_name=monorepo.repository_name,
        vcs_project_prefix=monorepo.vcs_path,
    )