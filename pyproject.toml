[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nacoskit"
version = "0.1.0"
description = "Building blocks for service-registry and configuration clients: data models, request parameters, UUIDs and small utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["service discovery", "configuration", "uuid", "registry", "rfc4122"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nacoskit"]

[tool.pytest.ini_options]
addopts = "-ra"
