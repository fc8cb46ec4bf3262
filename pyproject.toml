[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fsaqueue"
version = "0.1.0"
description = "Thread-safe block and header queue with string helpers for filesystem archiving pipelines"
requires-python = ">=3.10"
dependencies = []
keywords = ["archive", "backup", "queue", "threading", "pipeline"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Backup",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fsaqueue"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
