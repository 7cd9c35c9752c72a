# mikroscli

A command line companion for the mikros framework. It keeps a small settings
file for the tool, talks to external plugins that add new service kinds and
features, and provides the pieces used to build new services and protobuf
modules: survey prompts, template rendering, `service.toml` writing and
template contexts.

## Installation

```console
$ pip install .
```

This installs the `mikros` command. The `test` extra adds pytest.

## The `mikros` command

```console
$ mikros --help
$ mikros config --help
$ mikros config generate
$ mikros config edit
```

- `mikros config` with no subcommand prints its help.
- `mikros config generate` writes the default settings to
  `$HOME/.mikros/config.toml`. If the file already exists it prints
  `settings file already exists` and leaves it untouched.
- `mikros config edit` loads the settings and opens a text menu on the
  terminal: plugin paths, accessibility, colour theme (`base16`, `charm`,
  `dracula`, `catppuccin`, `default`) and named profiles (add, remove, edit
  or rename). When you quit, and only if something changed, it asks for
  confirmation before overwriting the file.

If the settings file cannot be read, the command stops with status 1.

## Settings

`mikroscli.settings.load()` returns the defaults, overridden by the values in
`$HOME/.mikros/config.toml` when that file exists. The defaults are:

- feature plugins in `$HOME/.mikros/plugins/features`
- service plugins in `$HOME/.mikros/plugins/services`
- in the `app` profile: repository name `protobuf-workspace`, project name
  `services`, VCS path prefix `github.com/your-organization` and custom
  authentication key `scopes`

`Settings.write()` saves the file, `Settings.hash()` returns the SHA-256 of its
TOML form and `Settings.theme()` returns the chosen theme name or `base`.

## Plugins

Plugins are plain executables placed in the plugin directories.
`mikroscli.discovery` lists the executable files of a directory in name order
and finds plugins by service kind (`get_service_plugin`) or by UI name
(`get_feature_plugin`). `mikroscli.client.FeaturePlugin` and `ServicePlugin`
run a plugin with command-line flags and read one JSON object from its
standard output.

A feature plugin answers:

- `-n` with its name as registered in the framework
- `-u` with the name shown to the user
- `-s` with the survey the user must answer
- `-v -i '<json answers>'` with the validated definitions for `service.toml`

A service plugin answers `-k` (the service kind it adds), `-s`,
`-v -i ...` and `-t -i '<json answers>'` (custom templates for the new
service).

A failing plugin prints a JSON object carrying an `error` field and exits with
a non-zero status; the client raises `PluginError` with that message.

### Writing a plugin in Python

`mikroscli.sdk` implements the plugin side. Implement `FeatureAPI` or
`ServiceAPI` and hand the object to `run_feature` or `run_service`; they parse
the flags above, call your code and print the reply. Any exception is
reported back through `fail`, which prints the error and exits with status 1.

```python
from mikroscli.sdk import FeatureAPI, PromptKind, Question, Survey, run_feature


class Cache(FeatureAPI):
    def name(self):
        return "cache"

    def ui_name(self):
        return "cache"

    def survey(self):
        return Survey(questions=[
            Question(name="ttl", prompt=PromptKind.INPUT, message="TTL:", default="0"),
        ])

    def validate_answers(self, answers):
        return {"enabled": True}


if __name__ == "__main__":
    run_feature(Cache())
```

`mikroscli.ui.run_form_from_survey` asks a survey's questions on the
terminal, including confirmation loops and follow-up surveys whose condition
matches an earlier answer.

## Building blocks

- `mikroscli.templating` renders Jinja2 templates from a directory
  (`new_session_from_files`) or from memory (`new_session_from_data`), with
  `toCamel`, `toSnake`, `toUpperSnake`, `toKebab`, `basename` and
  `templateName` available as functions and filters; `parse_block` renders a
  single piece of text.
- `mikroscli.definitions` writes `service.toml` and appends service and
  feature sections to it.
- `mikroscli.protobuf.parse` reads the package name and the RPCs of a
  `.proto` file.
- `mikroscli.proto_scaffold` builds the template context of a protobuf module:
  CRUD RPCs derived from an entity name, custom RPCs, HTTP RPCs and the
  chosen profile's names.
- `mikroscli.service_scaffold` holds the answers and template context of a
  new service, its imports and the service options block of its main file.
- `mikroscli.git`, `mikroscli.process` and `mikroscli.fs` wrap `git`, running
  external programs and filesystem work.

## What it does not do

- There is no `mikros new` command: the package has no interactive flow that
  creates protobuf repositories, service repositories, protobuf modules or
  services, and it ships no project template files. The scaffolding modules
  compute answers and template contexts but do not write project trees and do
  not run `go mod init`.
- There is no `mikros lint` command.