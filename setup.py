#!/usr/bin/env python

from setuptools import setup


VERSION = "0.1"

setup(
    name="html5update",
    version=VERSION,
    description="Rewrites the legacy HTML of Maven sites to HTML5.",
    license="AGPL-3.0-or-later",
    packages=["html5update", "_html5update"],
    python_requires=">=3.10",
    install_requires=["cssselect>=1.2", "lxml"],
    extras_require={"tests": ["pytest"]},
)
