[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crossref-fieldkit"
version = "0.1.0"
description = "Extract selected fields from Crossref JSONL.gz data files into CSV, and rewrite file paths in CSV indexes"
requires-python = ">=3.10"
dependencies = [
    "tqdm",
]
keywords = ["crossref", "doi", "metadata", "jsonl", "csv", "extraction"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Filters",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
crossref-fieldkit = "crossref_fieldkit.cli:main"
crossref-strip-paths = "crossref_fieldkit.stripper:main"

[tool.hatch.build.targets.wheel]
packages = ["crossref_fieldkit"]

[tool.pytest.ini_options]
addopts = "-ra"
