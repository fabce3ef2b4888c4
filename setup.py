# setup.py
from setuptools import setup, find_packages

setup(
    name="tmpdir",
    version="1.0.0",
    description=(
        "Uniquely named temporary directories that clean themselves up, "
        "with a symlink-excluding recursive copy for committing their contents"
    ),
    packages=find_packages(
        exclude=(
            "tests",
            "tests.*",
            "docs",
            "build",
            "dist",
        )
    ),
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
)
