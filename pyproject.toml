[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "copyrightlsp"
version = "0.1.0"
description = "A language server that reports missing copyright headers and offers to insert them"
requires-python = ">=3.10"
dependencies = []
keywords = ["lsp", "language-server", "copyright", "header", "lint"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
    "Topic :: Text Editors :: Integrated Development Environments (IDE)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
copyrightlsp = "copyrightlsp.server:main"

[tool.hatch.build.targets.wheel]
packages = ["copyrightlsp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
