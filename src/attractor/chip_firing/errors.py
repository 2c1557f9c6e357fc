class ChipFiringError(Exception):
    """
    Base class for every error raised by a chip-firing graph.
    Subclasses prefix their message with a short description of what went wrong.
    """
    prefix = "Chip firing error"

    def __init__(self, message):
        super(ChipFiringError, self).__init__(f"{self.prefix}: {message}")

class DimensionMismatch(ChipFiringError, ValueError):
    """An adjacency matrix or configuration has the wrong shape."""
    prefix = "Dimension mismatch"

class InvalidGraphStructure(ChipFiringError, ValueError):
    """A vertex index is out of range, or an adjacency matrix or edge is malformed."""
    prefix = "Invalid graph structure"

class NegativeChips(ChipFiringError, ValueError):
    """A configuration would place a negative number of chips on a vertex."""
    prefix = "Negative chips"

class NoActiveVertices(ChipFiringError):
    """A firing was requested but the vertex (or every vertex) is below its degree."""
    prefix = "No active vertices"
