import os

from setuptools import find_packages, setup


def read_package_variable(key, filename="__init__.py"):
    """Read the value of a variable from the package without importing."""
    module_path = os.path.join("src/relay_pagination", filename)
    with open(module_path) as module:
        for line in module:
            parts = line.strip().split(" ", 2)
            if parts[:-1] == [key, "="]:
                return parts[-1].strip("'").strip('"')
    return None


setup(
    name="relay-pagination",
    version=read_package_variable("VERSION"),
    description="Relay cursor connections over any ordered data source",
    license="MIT",
    keywords="graphql relay pagination cursor sqlalchemy python",
    classifiers=[
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages("src", exclude=["test", "test.*"]),
    include_package_data=True,
    install_requires=[
        "flupy>=1.0",
        "sqlalchemy>=1.4",
        "typing-extensions",
    ],
    extras_require={
        "test": ["pytest", "pytest-cov", "aiosqlite", "sqlalchemy[asyncio]>=1.4"],
        "dev": ["pylint", "black", "pre-commit"],
    },
)
