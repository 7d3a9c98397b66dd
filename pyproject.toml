[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ocmulticluster"
version = "0.1.0"
description = "Log in to several OpenShift clusters and print a health summary of each."
requires-python = ">=3.10"
dependencies = []
keywords = ["openshift", "kubernetes", "oc", "multicluster", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
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

[project.scripts]
oc-multicluster-tui = "ocmulticluster.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ocmulticluster"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
