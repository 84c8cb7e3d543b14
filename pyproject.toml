[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vgengine"
version = "0.1.0"
description = "Core pieces of a small software-rendered engine: profiling, a job queue, platform file helpers, font atlas files and per-frame state."
requires-python = ">=3.10"
dependencies = []
keywords = ["engine", "software-rendering", "profiling", "job-queue", "font-atlas", "bmp"]
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
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vgengine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
