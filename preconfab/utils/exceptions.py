class GenerationError(Exception):
    """Base class of the errors that abort a generation request."""

    pass


class ModelLookupFailure(GenerationError):
    """Exception raised when a module, block or port cannot be found in a model."""

    pass


class InvariantViolation(GenerationError):
    """Exception raised when the input models break a structural invariant."""

    pass


class PlacementFailure(GenerationError):
    """Exception raised when a benchmark pad has no valid pin in the fabric."""

    pass


class InvalidFileType(Exception):
    """Exception raised for unsupported or malformed input files."""

    pass


class CommandError(Exception):
    """Exception raised for errors in the command execution."""

    pass
