from setuptools import setup

with open("requirements.txt") as f:
    required = f.read().splitlines()

exec(open("circstats/version.py").read())
setup(
    name="circstats",
    version=__version__,  # noqa: F821
    description="Descriptive statistics and hypothesis tests for circular data",
    install_requires=required,
    extras_require={"test": ["pytest"]},
    packages=["circstats"],
    python_requires=">=3.9",
)
