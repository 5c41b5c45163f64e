[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mimirsbrunn"
version = "0.1.0"
description = "Building blocks for geocoding imports: administrative region lookup, label formatting, and loading of addresses and transit stops."
requires-python = ">=3.10"
keywords = ["geocoding", "gis", "addresses", "bano", "gtfs", "administrative regions"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]
dependencies = [
    "shapely",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mimirsbrunn"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
