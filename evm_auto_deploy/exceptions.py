"""Custom exception classes for evm-auto-deploy."""


class AutoDeployError(Exception):
    """Base exception for all tool errors."""

    pass


class ConfigurationError(AutoDeployError, ValueError):
    """Raised when no usable networks exist for the requested network type."""

    pass


class SelectionError(AutoDeployError, ValueError):
    """Raised when the user picks a network index that does not exist."""

    pass


class DeploymentError(AutoDeployError, RuntimeError):
    """Raised when submitting, signing or confirming a deployment fails."""

    pass


class SummaryWriteError(AutoDeployError, OSError):
    """Raised when the run summary cannot be written to disk."""

    pass
