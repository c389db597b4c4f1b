[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slingfort"
version = "0.1.0"
description = "A slingshot arcade game: knock down block towers and defeat the enemies hiding in them."
requires-python = ">=3.10"
keywords = ["game", "arcade", "slingshot", "physics", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
slingfort = "slingfort.app:main"

[tool.hatch.build.targets.wheel]
packages = ["slingfort"]

[tool.pytest.ini_options]
addopts = "-ra"
