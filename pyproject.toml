[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cgscene"
version = "0.1.0"
description = "A small scene graph with render states, transforms, tessellated shapes and classic raster algorithms"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["scene graph", "computer graphics", "rasterization", "bresenham", "scanline", "transform"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
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
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cgscene"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
