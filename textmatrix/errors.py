"""
Error Types

This module defines the exceptions and warnings raised by the text matrix
package. Only malformed input and invalid configuration abort an operation;
recoverable conditions (a step that had nothing to act on, a stem without a
dictionary completion) are reported through warnings and return values.
"""


class TextMatrixError(Exception):
    """Base class for all errors raised by textmatrix."""


class InputShapeError(TextMatrixError, TypeError):
    """
    Raised when a corpus source supplies something that is not text.

    Attributes:
        index: Position of the offending element or row
        column (str, optional): Column name for tabular sources
    """
    def __init__(self, message, index=None, column=None):
        super().__init__(message)
        self.index = index
        self.column = column


class ThresholdOutOfRangeError(TextMatrixError, ValueError):
    """Raised when a sparsity threshold lies outside [0, 1)."""
    def __init__(self, value):
        super().__init__(f"max_sparsity must be in [0, 1), got {value!r}")
        self.value = value


class ConfigurationError(TextMatrixError, ValueError):
    """Raised for unknown step kinds, algorithms, policies or options."""


class PipelineOrderWarning(UserWarning):
    """
    A normalization step could not act because an earlier step already
    removed its input (e.g. number expansion after number removal).
    """
