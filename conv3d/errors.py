"""Exceptions raised by conv3d."""


class Conv3dError(Exception):
    """Base class for all conv3d errors."""


class UsageError(Conv3dError):
    """Bad arguments, bad directories or unsupported file types. Exit code 1."""


class UserAbort(Conv3dError):
    """The operator declined a confirmation prompt. Exit code 0."""


class ConverterError(Conv3dError):
    """An external converter failed on a single file."""

    def __init__(self, path, tool, returncode=None, stderr=""):
        self.path = str(path)
        self.tool = tool
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        message = f"{tool} failed on {self.path}"
        if returncode is not None:
            message += f" (exit code {returncode})"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class ToolNotFoundError(ConverterError):
    """The configured converter executable is not installed."""

    def __init__(self, path, tool):
        super().__init__(path, tool)
        self.args = (f"{tool} not found, install it or point the config at it",)
