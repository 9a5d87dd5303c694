import pathlib
import re
import sys

from setuptools import find_packages, setup

if sys.version_info < (3, 9):
    raise RuntimeError("cookiestore requires Python 3.9+")


HERE = pathlib.Path(__file__).parent

txt = (HERE / "cookiestore" / "__init__.py").read_text("utf-8")
try:
    version = re.findall(r'^__version__ = "([^"]+)"\r?$', txt, re.M)[0]
except IndexError:
    raise RuntimeError("Unable to determine version.")


install_requires = [
    "attrs >= 17.3.0",
    "multidict >= 4.5, < 7.0",
    "yarl >= 1.6, < 2.0",
]

tests_require = [
    "freezegun",
    "pytest",
    "pytest-asyncio",
]


setup(
    name="cookiestore",
    version=version,
    description="Cookie storage and matching for HTTP clients",
    classifiers=[
        "License :: OSI Approved :: Apache Software License",
        "Intended Audience :: Developers",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Development Status :: 3 - Alpha",
        "Operating System :: OS Independent",
        "Topic :: Internet :: WWW/HTTP",
    ],
    python_requires=">=3.9",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=install_requires,
    extras_require={"test": tests_require},
    include_package_data=True,
)
