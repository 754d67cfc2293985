[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "archivist"
version = "0.1.0"
description = "Pack files and directories into zip, tar, tar.gz, tar.bz and tar.xz archives, and unpack them again"
requires-python = ">=3.10"
dependencies = []
keywords = ["archive", "compression", "zip", "tar", "gzip", "bzip2", "xz"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
archivist = "archivist.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["archivist"]

[tool.pytest.ini_options]
addopts = "-ra"
