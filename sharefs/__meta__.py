# -*- coding: utf-8 -*-
"""Define project metadata
"""

__title__ = "sharefs"
__summary__ = "A content-addressable store for small shared files."
__url__ = "https://github.com/dgilland/sharefs"

__version__ = "0.1.0"

__install_requires__ = ["fs>=2.4", "setuptools<81", "xxhash>=3.0"]
__tests_require__ = ["pytest", "tox"]

__author__ = "Derrick Gilland"
__email__ = "dgilland@gmail.com"

__license__ = "MIT License"
