[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "webrenderer"
version = "0.1.0"
description = "A small HTML and CSS toolkit: DOM tree, HTML parser, stylesheet parser, style matching and keyframe animation"
requires-python = ">=3.10"
dependencies = []
keywords = ["html", "css", "dom", "parser", "stylesheet", "selector", "specificity", "animation", "keyframes"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: HTML",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["webrenderer"]

[tool.pytest.ini_options]
addopts = "-ra"
