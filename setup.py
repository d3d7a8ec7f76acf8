from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="summitt",
    version="0.3.0",
    author="summitt contributors",
    description="Sum numeric tags extracted from text lines, e.g. file sizes from 'ls' output.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"summitt.schemas": ["*.json"]},
    python_requires=">=3.10",
    install_requires=["PyYAML", "jsonschema", "pandas"],
    extras_require={"dev": ["pytest"]},
    tests_require=["pytest"],
    entry_points={"console_scripts": ["summitt=summitt.cli:main"]},
)
