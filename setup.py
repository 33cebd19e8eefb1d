from setuptools import find_packages, setup

dependencies = [
    "numpy",
    "xarray",
    "dacite>=1.6",
    "PyYAML",
    "f90nml>=1.1.0",
]

test_requirements = ["pytest", "hypothesis"]


setup(
    name="lightning-nox",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.7",
    install_requires=dependencies,
    tests_require=test_requirements,
    extras_require={"mpi": ["mpi4py"], "test": test_requirements},
    version="0.1.0",
    description="Vertical distribution of lightning NOx following DeCaria (2000, 2005)",
    license="MIT",
)
