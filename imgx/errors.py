"""Exception hierarchy shared by the imgx services and commands.

Services raise these; only ``imgx.cli.main`` turns them into exit codes.
"""

EXIT_SUCCESS = 0
EXIT_API_ERROR = 1
EXIT_INPUT_ERROR = 2


class ImgxError(Exception):
    """Base class for every error imgx reports to the user."""


class InputError(ImgxError):
    """Bad or missing input: sources, credentials, arguments."""

    exit_code = EXIT_INPUT_ERROR


class MissingCredentialError(InputError):
    def __init__(self, variable: str) -> None:
        self.variable = variable
        super().__init__(f"{variable} environment variable is required.")


class UsageError(InputError):
    """Raised when positional arguments do not form a valid command."""


class ServiceError(ImgxError):
    """Failure reported by, or while talking to, the generation service."""

    exit_code = EXIT_API_ERROR
