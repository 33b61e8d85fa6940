[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "klibkit"
version = "0.1.0"
description = "In-place sorting and selection, a growable vector, and a buffered seekable reader for local files and URLs with S3 request signing"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "sorting",
    "introsort",
    "combsort",
    "mergesort",
    "heapsort",
    "radix sort",
    "quickselect",
    "vector",
    "http",
    "s3",
    "buffered reader",
]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
urlcat = "klibkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["klibkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
