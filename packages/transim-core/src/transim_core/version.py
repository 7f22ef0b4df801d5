"""Version of the transim packages."""

from __future__ import annotations

from transim_schemas.version import VersionInfo

VERSION = VersionInfo(major=0, minor=1, patch=0)
