[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "novide"
version = "0.11.2"
description = "Building blocks for a graphical editor front end: settings sync, persisted window state, keyboard and mouse input translation, and a ring buffer."
requires-python = ">=3.11"
dependencies = []
keywords = ["editor", "gui", "keyboard", "mouse", "settings", "ring-buffer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["novide"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
