[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mikroscli"
version = "0.1.0"
description = "Command line companion for the mikros framework: settings, plugins and project building blocks"
requires-python = ">=3.11"
keywords = ["mikros", "scaffolding", "code-generation", "protobuf", "cli", "plugins", "templates"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "click>=8.1",
    "jinja2>=3.1",
    "tomli-w>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[project.scripts]
mikros = "mikroscli.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mikroscli"]

[tool.hatch.build.targets.sdist]
include = ["mikroscli", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
ignore_missing_imports = true
