"""Service-level errors surfaced to the user as notifications."""


class FoodEstimationError(Exception):
    """Raised when the model call for a food description fails."""


class RequestInProgressError(Exception):
    """Raised when an estimation is requested while another is outstanding."""


class FoodLogSaveError(Exception):
    """Raised when the food log cannot be persisted."""


class ExportError(Exception):
    """Raised when an export cannot be written to its destination."""

    user_message = "Couldn't save the export. Please try again."


class ExportDestinationError(ExportError):
    """Raised when an export destination falls outside the export directory."""
