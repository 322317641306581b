[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shelltools"
version = "0.1.0"
description = "A collection of small command-line utilities for everyday shell work"
requires-python = ">=3.11"
dependencies = [
    "tomli-w",
]
keywords = [
    "cli",
    "shell",
    "utilities",
    "prompt",
    "calendar",
    "graph",
    "templates",
    "todo",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ctc = "shelltools.ctc:main"
gs = "shelltools.gitstatus:main"
filstu = "shelltools.filstu:main"
lsr = "shelltools.lsr:main"
dirsize = "shelltools.size:main"
fpwd = "shelltools.fpwd:main"
fpwd-daemon = "shelltools.fpwd_daemon:main"
tmpl = "shelltools.tmpl:main"
linefilter = "shelltools.linefilter:main"
calview = "shelltools.calview:main"
rehan = "shelltools.template_cli:main"
rehan-prepare = "shelltools.template_cli:prepare_main"
shtest = "shelltools.tester:main"
rot = "shelltools.rotcli:main"
runner = "shelltools.runner:main"
todos = "shelltools.todos:main"

[tool.hatch.build.targets.wheel]
packages = ["shelltools"]

[tool.hatch.build.targets.sdist]
include = ["shelltools", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
