"""
libhtpasswd setup script
"""
#=============================================================================
# init script env -- ensure cwd = root of source dir
#=============================================================================
import os
root_dir = os.path.abspath(os.path.join(__file__, ".."))
os.chdir(root_dir)

#=============================================================================
# imports
#=============================================================================
from setuptools import setup, find_packages
import re
import sys

#=============================================================================
# version string
#=============================================================================

# read version string from libhtpasswd without importing it (and its dependencies)
with open(os.path.join(root_dir, "libhtpasswd", "__init__.py")) as fh:
    version = re.search(r'^__version__ = "([^"]+)"', fh.read(), re.M).group(1)

#=============================================================================
# static text
#=============================================================================
SUMMARY = "read, write and verify Apache htpasswd files"

DESCRIPTION = """\
libhtpasswd manages credential files in Apache's htpasswd format.
It parses and renders the ``user:hash`` line format with strict validation,
and generates & verifies the hash formats htpasswd files contain:
bcrypt, Apache's MD5 variant (``$apr1$``), ``{SHA}`` and plaintext.
Legacy DES crypt hashes are recognized, and refused as insecure.

It also ships an ``htpasswd``-like command line tool, ``libhtpasswd``.
"""

KEYWORDS = """\
password hash security
apache htpasswd apr1 md5-crypt bcrypt
"""

CLASSIFIERS = """\
Intended Audience :: Developers
Intended Audience :: System Administrators
License :: OSI Approved :: BSD License
Natural Language :: English
Operating System :: OS Independent
Programming Language :: Python :: 3
Programming Language :: Python :: Implementation :: CPython
Programming Language :: Python :: Implementation :: PyPy
Topic :: Security :: Cryptography
Topic :: Software Development :: Libraries
""".splitlines()

if '.dev' in version:
    CLASSIFIERS.append("Development Status :: 3 - Alpha")
else:
    CLASSIFIERS.append("Development Status :: 5 - Production/Stable")

#=============================================================================
# run setup
#=============================================================================
setup(
    # package info
    packages=find_packages(root_dir, include=["libhtpasswd", "libhtpasswd.*"]),
    zip_safe=True,
    python_requires=">=3.9",

    # metadata
    name="libhtpasswd",
    version=version,
    license="BSD",

    description=SUMMARY,
    long_description=DESCRIPTION,
    keywords=KEYWORDS,
    classifiers=CLASSIFIERS,

    install_requires=[
        "bcrypt>=3.1.0",
        "typing_extensions>=4.1",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "pytest-archon",
        ],
    },
    entry_points={
        "console_scripts": [
            "libhtpasswd = libhtpasswd.cli:main",
        ],
    },

    # extra opts
    script_args=sys.argv[1:],
)

#=============================================================================
# eof
#=============================================================================
