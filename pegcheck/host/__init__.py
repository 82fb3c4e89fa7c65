# pegcheck/host/__init__.py
"""Host-language (Python) support for action code: front-end interface,
the default Python front-end and the comment scanner."""

from .frontend import (
    Comment, Frontend, HostParse, HostParseFailure, HostScanFailure, HostToken,
)
from .comments import scan_comments
from .python import DEFAULT_IMPLICIT_ARGS, PythonFrontend
