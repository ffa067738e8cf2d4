"""Core Service protocol versions and the features each one gates."""

from __future__ import annotations

from enum import StrEnum


class CoreServiceVersion(StrEnum):
    """Supported Core Service endpoint versions, oldest first."""

    V2011_SP1 = "2011-SP1"
    V2013 = "2013"
    V2013_SP1 = "2013-SP1"
    WEB_8_1 = "Web-8.1"
    WEB_8_5 = "Web-8.5"
    SITES_9_0 = "Sites-9.0"
    SITES_9_1 = "Sites-9.1"
    SITES_9_5 = "Sites-9.5"
    SITES_9_6 = "Sites-9.6"

    @property
    def rank(self) -> int:
        return list(CoreServiceVersion).index(self)

    def at_least(self, other: CoreServiceVersion) -> bool:
        return self.rank >= other.rank

    @property
    def supports_business_process_types(self) -> bool:
        """Business process types were introduced with Web 8."""
        return self.at_least(CoreServiceVersion.WEB_8_1)


DEFAULT_VERSION = CoreServiceVersion.WEB_8_5
