[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wkformat"
version = "3.1.1"
description = "Chunked container, image header and metadata model for the WK image format"
requires-python = ">=3.10"
dependencies = []
keywords = ["image", "image-format", "wk", "exif", "xmp", "icc", "hdr", "chunk"]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["wkformat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
