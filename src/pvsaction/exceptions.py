"""Exception hierarchy for pvsaction.

Every error raised by the action derives from PVSError so the entry points
can report any failure as a step failure without catching unrelated errors.
"""

from typing import Optional


class PVSError(Exception):
    """Base exception for all pvsaction errors."""


class UnimplementedError(PVSError):
    """Raised when a platform does not support the requested analyzer."""

    def __init__(self, message: str = "Unimplemented"):
        super().__init__(message)


class ComponentNotFoundError(PVSError):
    """Raised when a PVS-Studio component cannot be located."""

    def __init__(self, component: str):
        self.component = component
        super().__init__(f"Unable to find PVS-Studio component: {component}")


class UnsupportedPlatformError(PVSError):
    """Raised when the host OS is not Windows, Linux or macOS."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"Unsupported platform: {platform}")


class InputValidationError(PVSError):
    """Raised for a malformed or contradictory action input.

    The message always names the offending input.
    """

    def __init__(self, input_name: str, message: str):
        self.input_name = input_name
        super().__init__(message)


class MissingInputError(InputValidationError):
    """Raised when a required action input is empty."""

    def __init__(self, input_name: str, message: Optional[str] = None):
        super().__init__(
            input_name,
            message or f"The '{input_name}' input should be specified!",
        )


class InstallationError(PVSError):
    """Raised when a package manager fails to install the analyzer."""

    def __init__(self, message: str, exit_code: int, output: str = ""):
        self.exit_code = exit_code
        self.output = output
        super().__init__(message)


class ProcessFailedError(PVSError):
    """Raised when a PVS-Studio executable exits with a non-zero code."""

    def __init__(self, executable: str, exit_code: int, stdout: str, stderr: str):
        self.executable = executable
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        details = stderr.strip() or stdout.strip()
        message = f"{executable} exited with code {exit_code}"
        if details:
            message += f". Details: {details}"
        super().__init__(message)


class RegistryUnavailableError(PVSError):
    """Raised when the Windows registry cannot be queried at all."""
