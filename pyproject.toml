[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "surfacescope"
version = "0.1.0"
description = "Configuration, scope handling and wordlist tooling for DNS-based attack surface mapping"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "dns",
    "subdomain",
    "enumeration",
    "attack-surface",
    "wordlist",
    "scope",
    "configuration",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Information Technology",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["surfacescope"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
