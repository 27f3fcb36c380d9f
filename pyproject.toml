[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "timbreadapter"
version = "0.1.0"
description = "Analyse a short audio sample and map its timbre to synth-style patch parameters."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["audio", "timbre", "analysis", "synthesizer", "patch", "spectrum", "wav"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Natural Language :: English",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
timbreadapter = "timbreadapter.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["timbreadapter"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
