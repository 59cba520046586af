[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flacdec"
version = "0.4.3"
description = "Building blocks for decoding FLAC audio: byte and bit readers, CRC checks, frame headers and sample blocks"
requires-python = ">=3.10"
dependencies = []
keywords = ["flac", "lossless", "audio", "codec", "crc", "bitstream"]
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
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["flacdec"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
