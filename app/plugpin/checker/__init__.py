"""Plugin update checking."""

from plugpin.checker.update import CheckState, UpdateChecker, UpdateCheckResult

__all__ = ["CheckState", "UpdateCheckResult", "UpdateChecker"]
