"""
Utilities for pageflow tests.

    from pageflow.utils import api_utils, string_utils, test_data_utils
"""

from . import api_utils, string_utils, test_data_utils

__all__ = [
    "api_utils",
    "string_utils",
    "test_data_utils",
]
