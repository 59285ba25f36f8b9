"""Centralized exit codes for the decomment CLI."""


class ExitCodes:
    """Standard exit codes for decomment commands."""

    SUCCESS = 0

    # --check found files that still carry comments
    CHANGES_FOUND = 1

    # Click's own code for bad flags / missing paths
    USAGE_ERROR = 2

    @classmethod
    def get_description(cls, code: int) -> str:
        """Get human-readable description for an exit code."""
        descriptions = {
            cls.SUCCESS: "Success - nothing left to do",
            cls.CHANGES_FOUND: "Comments found that would be removed",
            cls.USAGE_ERROR: "Invalid arguments or target path",
        }
        return descriptions.get(code, f"Unknown exit code: {code}")
