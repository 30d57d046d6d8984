[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sbombastic"
version = "0.1.0"
description = "Resource types, status conditions and reconcilers for scanning container registries for SBOMs and vulnerabilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["sbom", "vulnerability", "container", "registry", "kubernetes", "reconciler"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sbombastic"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
