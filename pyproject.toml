[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "railflow"
version = "0.1.0"
description = "Railway network records in CSV files and passenger traffic analysis: load factors, bidirectional flow, station heat and short-term forecasts."
requires-python = ">=3.10"
dependencies = []
keywords = ["railway", "passenger traffic", "load factor", "forecast", "csv"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["railflow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
