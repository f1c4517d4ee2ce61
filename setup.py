#
# sonar-client
# Copyright (C) 2025 Olivier Korach
# mailto:olivier.korach AT gmail DOT com
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 3 of the License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program; if not, write to the Free Software Foundation,
# Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301, USA.
#
import setuptools
from sonarclient import version


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()
setuptools.setup(
    name="sonar-client",
    version=version.PACKAGE_VERSION,
    author="Olivier Korach",
    author_email="olivier.korach@gmail.com",
    description="A client library and command line for the SonarQube Server Web API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/okorach/sonar-client",
    project_urls={
        "Bug Tracker": "https://github.com/okorach/sonar-client/issues",
        "Documentation": "https://github.com/okorach/sonar-client/README.md",
        "Source Code": "https://github.com/okorach/sonar-client",
    },
    packages=setuptools.find_packages(include=["sonarclient", "sonarclient.*", "cli"]),
    install_requires=[
        "python-dateutil",
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)",
        "Operating System :: OS Independent",
    ],
    entry_points={
        "console_scripts": [
            "sonar-client = cli.sonar_client:main",
        ]
    },
    python_requires=">=3.9",
)
