"""numfmt - Locale-Aware Number Formatting Powered by Babel."""

from numfmt.formatting import NumberStyle, format_number
from numfmt.intl import LocaleNumberFormat, NumberFormatOptions

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "NumberStyle",
    "format_number",
    "LocaleNumberFormat",
    "NumberFormatOptions",
]
