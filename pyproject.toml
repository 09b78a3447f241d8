[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wschat"
version = "0.1.0"
description = "A small terminal chat client that exchanges JSON messages over a WebSocket"
requires-python = ">=3.10"
dependencies = [
    "websockets",
]
keywords = ["chat", "websocket", "client", "event-bus"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
wschat = "wschat.app:main"

[tool.hatch.build.targets.wheel]
packages = ["wschat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
