[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ahoylsp"
version = "0.1.0"
description = "Language analysis for the Ahoy language: symbols, outline, diagnostics, definitions and completion"
requires-python = ">=3.10"
dependencies = []
keywords = ["ahoy", "language-server", "lsp", "diagnostics", "completion", "editor"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors :: Integrated Development Environments (IDE)",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ahoylsp"]

[tool.hatch.build.targets.sdist]
include = ["ahoylsp", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
