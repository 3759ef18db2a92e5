[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bsdcompat"
version = "0.1.0"
description = "BSD-style string utilities: vis encoding, bounded wide-string copy and concatenation, and the ChaCha20 stream cipher"
requires-python = ">=3.10"
dependencies = []
keywords = ["bsd", "vis", "wcslcpy", "wcslcat", "chacha", "escaping"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bsdcompat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
