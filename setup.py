import os

from setuptools import setup

here = os.path.abspath(os.path.dirname(__file__))

version = {}
with open(os.path.join(here, "geomember", "_version.py")) as f:
    exec(f.read(), version)

setup(
    name="geomember",
    version=version["__version__"],
    description="Typed, validating GeoJSON decoding built on msgspec",
    license="BSD",
    packages=["geomember"],
    package_data={"geomember": ["py.typed"]},
    python_requires=">=3.9",
    install_requires=["msgspec>=0.18"],
    extras_require={"test": ["pytest"]},
)
