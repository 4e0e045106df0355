"""Version lookup for numeval."""

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

# Present only in a source checkout
_PYPROJECT = Path(__file__).parent.parent.parent / "pyproject.toml"
_VERSION_RE = re.compile(r'^version\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)


def get_version() -> str:
    """Version from the checkout's pyproject.toml, else the installed metadata."""
    if _PYPROJECT.is_file():
        if match := _VERSION_RE.search(_PYPROJECT.read_text()):
            return match.group(1)
    try:
        return _metadata_version("numeval")
    except PackageNotFoundError:
        return "0.0.0"
