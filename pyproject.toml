[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "esoperator"
version = "0.1.0"
description = "Label selectors, CPU metric samples and rolling-update ordering for Elasticsearch data nodes run as stateful sets"
requires-python = ">=3.10"
dependencies = []
keywords = ["elasticsearch", "kubernetes", "operator", "statefulset", "rolling-update"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Clustering",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["esoperator"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
