[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polytrack"
version = "0.1.0"
description = "Binary-frame labeling, dilation, diffusion filtering, object tracking, background modelling and polynomial Mahalanobis colour classification"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "image-processing",
    "tracking",
    "connected-components",
    "dilation",
    "diffusion",
    "mahalanobis",
    "background-subtraction",
]
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
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["polytrack"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
