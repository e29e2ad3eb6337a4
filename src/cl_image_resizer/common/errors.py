from typing_extensions import override


class ResizerError(Exception):
    """Base class for all resizer errors."""

    def __init__(self, message: str = "Image resize failed."):
        self.message: str = message
        super().__init__(self.message)

    @override
    def __str__(self):
        return self.message


class EnvironmentUnavailableError(ResizerError):
    """The imaging codecs needed for a run are missing. Fatal for the whole batch."""


class InputNotFoundError(ResizerError):
    """Input path does not exist. The file is skipped."""


class UnsupportedFormatError(ResizerError):
    """Input extension is not a supported image format. The file is skipped."""


class OutputDirectoryCreateError(ResizerError):
    """The parent directory of the output file could not be created."""


class ProcessingError(ResizerError):
    """Decoding, rendering or encoding a file failed."""


class InvalidDimensionsError(ProcessingError):
    """Source or target dimensions cannot produce a canvas."""


class OutputConflictError(ResizerError):
    """An earlier input of the same batch already writes to this output path."""
