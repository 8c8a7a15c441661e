[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lowfi"
version = "2.0.2"
description = "Building blocks for a simple lofi music player: track lists, downloading, MP3 playback and a terminal interface."
requires-python = ">=3.10"
keywords = ["lowfi", "lofi", "music", "player", "terminal", "mp3"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Players :: MP3",
]
dependencies = [
    "beautifulsoup4",
    "httpx",
    "platformdirs",
    "pygame",
    "regex",
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "respx",
]

[tool.hatch.build.targets.wheel]
packages = ["lowfi"]

[tool.hatch.build.targets.sdist]
include = ["lowfi", "tests", "pyproject.toml"]

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
