from setuptools import setup, find_packages

setup(
    name="dynoexpr",
    version="0.1.0",
    packages=find_packages(exclude=("tests", "tests.*", "examples")),
    install_requires=[
        "numpy",
        "networkx",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.9",
    description="dynoexpr compiles arithmetic expressions over typed dataflow nodes into a single composed node.",
    long_description=open('README.md').read(),
    long_description_content_type="text/markdown",
    author="Ludwig",
    author_email="yuzeliu@gmail.com",
    url=None,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
