[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "srops"
version = "0.1.0"
description = "Build and compare Kubernetes manifests for StarRocks-style FE/BE/CN clusters"
requires-python = ">=3.10"
dependencies = []
keywords = ["kubernetes", "statefulset", "deployment", "autoscaler", "manifests"]
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
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["srops"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
