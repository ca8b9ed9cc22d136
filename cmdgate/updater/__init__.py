"""更新检查"""

from .update_checker import UpdateChecker, VersionFetcher

__all__ = ["UpdateChecker", "VersionFetcher"]
