class HopfieldError(Exception):
    """
    Base class for every error raised by a Hopfield network.
    Subclasses prefix their message with a short description of what went wrong.
    """
    prefix = "Hopfield error"

    def __init__(self, message):
        super(HopfieldError, self).__init__(f"{self.prefix}: {message}")

class DimensionMismatch(HopfieldError, ValueError):
    """A state or pattern does not have one entry per neuron."""
    prefix = "Dimension mismatch"

class SingularMatrix(DimensionMismatch):
    """
    The pattern overlap matrix could not be inverted during pseudo-inverse training.

    Derives from DimensionMismatch so that callers catching shape problems also catch this one.
    """

class InvalidStateValue(HopfieldError, ValueError):
    """A state contains an entry other than +1.0 or -1.0."""
    prefix = "Invalid state value"

class NotPerfectSquare(HopfieldError):
    """A state cannot be laid out on a square grid."""
    prefix = "Grid dimension error"
