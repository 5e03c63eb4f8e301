[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aplib"
version = "0.1.0"
description = "Extract data from Apple Aperture libraries."
requires-python = ">=3.10"
dependencies = []
keywords = ["aperture", "photo", "library", "plist", "xmp", "exif", "iptc", "metadata"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
aplib-dumper = "aplib.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["aplib"]

[tool.pytest.ini_options]
addopts = "-ra"
