[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "asabr"
version = "0.1.0"
description = "Schedule-aware bundle routing primitives: contacts, nodes, resource managers, distances and contact plan readers"
requires-python = ">=3.10"
dependencies = []
keywords = ["dtn", "routing", "contact-graph", "bundle-protocol", "sabr", "contact-plan"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["asabr"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
