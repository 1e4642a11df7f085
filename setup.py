#!/usr/bin/env python3

# Standard libraries.
import setuptools  # type: ignore


setuptools.setup(
    name="scoped-env",
    version="0.0.0.1",
    description="Environment variable overrides restored on scope exit",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    license="MIT",
    install_requires=[
        "appdirs >= 1.4.4",
        "pydantic >= 2.0",
    ],
    extras_require={
        "dev": [
            "black >= 21.9b0",
            "coverage[toml] >= 6.0.2",
            "mypy >= 0.910",
            "pytest >= 6.2.5",
            "tox >= 3.24.4",
        ],
        "test": [
            "pytest >= 6.2.5",
        ],
    },
    python_requires=">= 3.9",
)
