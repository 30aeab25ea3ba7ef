[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "practicekit"
version = "0.1.0"
description = "Small, self-contained building blocks: even sums, callbacks, feature toggles, file versions, timeouts, a parameter store, simple WSGI handlers and XML-backed repositories."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "callbacks",
    "feature-toggle",
    "versioning",
    "timeouts",
    "repository",
    "wsgi",
    "xml",
]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
practicekit-files = "practicekit.fileprocessing:main"
practicekit-params = "practicekit.paramstore:main"
practicekit-web = "practicekit.webhandlers:main"
practicekit-documents = "practicekit.documents:main"
practicekit-users = "practicekit.users:main"

[tool.hatch.build.targets.wheel]
packages = ["practicekit"]

[tool.hatch.build.targets.sdist]
include = ["practicekit", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
