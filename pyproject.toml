[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "redline"
version = "0.1.0"
description = "Text diff result types, edit analysis, operation selectors and lightweight change classifiers"
requires-python = ">=3.10"
dependencies = []
keywords = ["diff", "text", "edit analysis", "classification", "similarity", "naive bayes"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: General",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["redline"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
