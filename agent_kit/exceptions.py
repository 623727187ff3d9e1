"""
Claude Agent Kit exceptions.

This module contains all custom exception classes used throughout Claude Agent Kit.
"""


class KitError(Exception):
    """Base exception for Claude Agent Kit errors."""
    pass


class PathSecurityViolation(KitError):
    """Raised when a path escapes the template root or the configuration root."""

    def __init__(self, path, kind: str, message: str = None):
        self.path = str(path)
        self.kind = kind
        if message is None:
            message = f"Path '{self.path}' is outside the {kind} root"
        super().__init__(message)


class InvalidAssetName(KitError):
    """Raised when a user-supplied asset name fails validation."""

    def __init__(self, name: str, kind: str, message: str):
        self.name = name
        self.kind = kind
        super().__init__(message)


class FileOperationError(KitError):
    """Raised when file operations fail."""
    pass


class DetectionReadError(KitError):
    """Raised when a manifest cannot be read or parsed during stack detection."""
    pass


class SkillInstallWarning(KitError):
    """Raised when skill installation fails; downgraded to a warning by the installer."""
    pass


class UnknownStackError(KitError):
    """Raised when a stack template ID has no catalog entry."""
    pass
