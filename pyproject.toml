[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubeview"
version = "0.1.0"
description = "A spinning textured cube rendered with OpenGL in a pyglet window"
requires-python = ">=3.10"
keywords = ["opengl", "pyglet", "3d", "cube", "shader", "texture"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Environment :: Win32 (MS Windows)",
    "Environment :: MacOS X",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "pyglet",
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cubeview = "cubeview.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cubeview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
