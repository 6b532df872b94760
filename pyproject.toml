[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nfrender"
version = "0.6.2"
description = "Colouring of Newton fractal computation results, render presets, and helpers for zoom and video tooling"
requires-python = ">=3.11"
dependencies = [
    "numpy",
]
keywords = [
    "fractal",
    "newton-fractal",
    "rendering",
    "hsv",
    "visualization",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
nfrender-check = "nfrender.render_config:main"

[tool.hatch.build.targets.wheel]
packages = ["nfrender"]

[tool.hatch.build.targets.sdist]
include = [
    "nfrender",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
