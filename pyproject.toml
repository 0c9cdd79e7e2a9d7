[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fluentkit"
version = "1.0.0"
description = "Framework-independent core of a Fluent-style UI toolkit: colours, themes, text styles, table and tree models, captchas and hotkeys"
requires-python = ">=3.10"
dependencies = []
keywords = ["fluent", "theme", "colors", "table-model", "tree-model", "captcha", "hotkey"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Software Development :: User Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fluentkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
