"""
Error Taxonomy for Exam Sheet
Exceptions raised synchronously by the grid engine before any change is applied.
"""


class ExamSheetError(ValueError):
    """Base class for caller-visible document model failures."""


class GridError(ExamSheetError):
    """Base class for rejected table grid operations."""


class StructuralConflict(GridError):
    """Raised when a row/column removal would cut through a merged span."""


class InvalidSelection(GridError):
    """Raised when a merge/split request does not meet eligibility."""
