[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "swole"
version = "0.1.0"
description = "Cookie-backed A/B testing experiments for web applications"
requires-python = ">=3.10"
dependencies = []
keywords = ["ab-testing", "experiments", "split-testing", "cookies", "wsgi"]
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
    "Topic :: Internet :: WWW/HTTP :: Session",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
swole-demo = "swole.server:main"

[tool.hatch.build.targets.wheel]
packages = ["swole"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
