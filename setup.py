#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Setup process."""
import sys
from io import open
from os import getenv, path
from typing import Any, Dict, List

import toml
from setuptools import find_packages, setup


def get_package_requirements(package: str, version: Any) -> List[str]:
    packages = []
    package_name = package
    if isinstance(version, dict):
        if "sys_platform" in version and version["sys_platform"].split()[1].strip().strip("'\"") != sys.platform:
            return packages
        if "version" in version and version['version'] != "*":
            package_name = f"{package}{version['version']}"
        if "extras" in version:
            for extra in version["extras"]:
                packages.append(f"{package}[{extra}]")
    else:
        if isinstance(version, str) and version != "*":
            package_name = f"{package}{version}"
    packages.append(package_name)
    return packages


def get_pipfile_requirements(section: str) -> List[str]:
    try:
        # read my pipfile
        with open('Pipfile', 'r') as fh:
            pipfile = fh.read()
        # parse the toml
        pipfile_toml = toml.loads(pipfile)
    except FileNotFoundError:
        return []
    # if the section isn't there then just return an empty list
    try:
        required_packages = pipfile_toml[section].items()
    except KeyError:
        return []
    # If a version/range is specified in the Pipfile honor it
    # otherwise just list the package
    packages = []
    for package, version in required_packages:
        packages.extend(get_package_requirements(package, version))
    return packages


def get_extras() -> Dict[str, List[str]]:
    return {"test": get_pipfile_requirements("dev-packages")}


def get_version():
    version = open("VERSION", 'r').read().strip()
    build_number = getenv("BUILD_NUMBER", 0)
    branch = getenv("BRANCH_NAME", "")
    full_version = f"{version}"
    if branch != "":
        if branch.startswith("rc"):
            full_version = f"{version}.rc{build_number}"
        elif branch != 'main' and not branch.startswith('release'):
            full_version = f"{version}.dev{build_number}"
    return full_version


with open(path.join(path.abspath(path.dirname(__file__)), 'README.md'),
          encoding='utf-8') as f:
    long_description = f.read()


setup(
    # Basic project information
    name='sync-s3-static-python',
    version=get_version(),
    # Detailed description
    description='Extract a zip artifact from S3 and sync it to a static website bucket',
    long_description=long_description,
    long_description_content_type='text/markdown',
    classifiers=[
        'Intended Audience :: Developers',
        'Natural Language :: English',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13'
    ],
    # Package configuration
    packages=find_packages(exclude=('tests', 'tests.*')),
    include_package_data=True,
    python_requires='>= 3.11',
    install_requires=get_pipfile_requirements("packages"),
    extras_require=get_extras(),
    # Licensing and copyright
    license='MIT',
    entry_points={
        'console_scripts': ['sync-s3-static=sync_s3_static_python.sync:main'],
    }
)
