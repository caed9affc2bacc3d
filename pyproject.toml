[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tempdirbuilder"
version = "0.1.0"
description = "Create a temporary directory pre-populated with files and directories"
requires-python = ">=3.10"
dependencies = []
keywords = ["filesystem", "folders", "test", "temporary", "fixtures"]
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
    "Topic :: Software Development :: Testing",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tempdirbuilder"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
