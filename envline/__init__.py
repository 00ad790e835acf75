"""Top-level package for envline.

This package parses dotenv-style assignment files and YAML documents into a
flat mapping of environment variables. The main entry point is `Parser`;
`load` and `overload` apply a file to the process environment.
"""

from loguru import logger as _loguru_logger

from .config import ParserSettings
from .errors import DocumentError, EnvlineError, FormatError, SubstitutionError
from .loader import load, overload, parse_file
from .parser import Parser, parse

__all__ = [
    "DocumentError",
    "EnvlineError",
    "FormatError",
    "Parser",
    "ParserSettings",
    "SubstitutionError",
    "__version__",
    "load",
    "overload",
    "parse",
    "parse_file",
]

__version__ = "0.1.0"

_loguru_logger.disable("envline")
