from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import re

from pysatl_univariate import __version__

PEP440_RELEASE = r"\d+(\.\d+)*([abc]|rc)?\d*(\.post\d+)?(\.dev\d+)?"


def test_version_pep440() -> None:
    assert re.match(rf"^(\d+!)?{PEP440_RELEASE}$", __version__)
