"""
Cli package.
"""

from .cli_ui import (
    COLOR_ERROR,
    COLOR_INFO,
    COLOR_SUCCESS,
    COLOR_WARNING,
    InfoPanel,
    TableDisplay,
    format_assessment,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "COLOR_ERROR",
    "COLOR_INFO",
    "COLOR_SUCCESS",
    "COLOR_WARNING",
    "InfoPanel",
    "TableDisplay",
    "format_assessment",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
