import os
from codecs import open

from setuptools import setup, find_packages

base_dir = os.path.abspath(os.path.dirname(__file__))
info = {}
with open(os.path.join(base_dir, "total_connect_api", "__version__.py"), "r") as v:
    exec(v.read(), info)

with open("README.md", "r", "utf-8") as r:
    readme = r.read()

requires = [
    "aiohttp>=3.8.0",
    "PyJWT>=2.4.0",
    "voluptuous>=0.13.1",
]

test_requirements = [
    "pytest>=7.0",
    "pytest-asyncio>=0.21",
]

setup(
    name=info["__title__"],
    version=info["__version__"],
    description=info["__description__"],
    long_description=readme,
    long_description_content_type="text/markdown",
    author=info["__author__"],
    author_email=info["__author_email__"],
    packages=find_packages(include=[
        "total_connect_api", "total_connect_api.*"
    ]),
    package_data={"": ["LICENSE", "NOTICE"]},
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=requires,
    license=info["__license__"],
    zip_safe=False,
    tests_require=test_requirements,
    extras_require={"test": test_requirements},
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Intended Audience :: Developers",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Framework :: AsyncIO",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
