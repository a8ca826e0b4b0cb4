[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "petnet"
version = "0.1.0"
description = "Building blocks for a small user-space network stack: hash tables, JSON trees, UDP headers and UDP endpoint bookkeeping"
requires-python = ">=3.10"
dependencies = []
keywords = ["networking", "udp", "hashtable", "json", "endpoints"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
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
packages = ["petnet"]

[tool.pytest.ini_options]
addopts = "-ra"
