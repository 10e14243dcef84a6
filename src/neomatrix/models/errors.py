"""
Domain errors

Every editor/export failure that should reach the user as a rejected
operation derives from DomainError. The API layer maps these to JSON
error responses (see api/middleware/error_handler.py).
"""

from typing import Optional


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
        status_code: int = 400
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)


class GridSizeError(DomainError):
    """Grid width/height outside the supported range"""
    def __init__(self, width, height, minimum: int, maximum: int):
        super().__init__(
            code="INVALID_GRID_SIZE",
            message=f"Grid size must be between {minimum} and {maximum} (got {width}x{height})",
            details={"width": width, "height": height, "min": minimum, "max": maximum},
            status_code=422
        )


class StepDelayError(DomainError):
    """Scroll step delay below the minimum"""
    def __init__(self, delay_ms, minimum: int):
        super().__init__(
            code="INVALID_STEP_DELAY",
            message=f"Step delay must be at least {minimum} ms (got {delay_ms})",
            details={"delay_ms": delay_ms, "min": minimum},
            status_code=422
        )


class InvalidColorError(DomainError):
    """Color text could not be parsed"""
    def __init__(self, value):
        super().__init__(
            code="INVALID_COLOR",
            message=f"Invalid color '{value}' (expected #rrggbb)",
            details={"value": str(value)},
            status_code=422
        )


class FrameIndexError(DomainError):
    """Frame index doesn't exist"""
    def __init__(self, index, frame_count: int):
        super().__init__(
            code="FRAME_NOT_FOUND",
            message=f"Frame {index} not found ({frame_count} frames)",
            details={"index": index, "frame_count": frame_count},
            status_code=404
        )


class LastFrameError(DomainError):
    """Attempt to delete the only remaining frame"""
    def __init__(self):
        super().__init__(
            code="LAST_FRAME",
            message="Cannot delete the last remaining frame",
            status_code=409
        )


class ImportFormatError(DomainError):
    """Imported document is malformed"""
    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(
            code="INVALID_IMPORT",
            message=message,
            details={"errors": errors or []},
            status_code=422
        )


class EmptyAnimationError(DomainError):
    """Nothing is lit in any frame"""
    def __init__(self, operation: str):
        super().__init__(
            code="EMPTY_ANIMATION",
            message=f"No pixels to {operation}",
            details={"operation": operation},
            status_code=409
        )


class PaletteOverflowError(DomainError):
    """GIF global color table cannot hold every color"""
    def __init__(self, color_count: int, maximum: int = 256):
        super().__init__(
            code="PALETTE_OVERFLOW",
            message=f"Animation uses {color_count} colors, GIF supports at most {maximum}",
            details={"color_count": color_count, "max": maximum},
            status_code=422
        )


class CellIndexError(DomainError):
    """LED index outside the grid"""
    def __init__(self, index, cell_count: int):
        super().__init__(
            code="CELL_NOT_FOUND",
            message=f"Cell {index} is outside the grid ({cell_count} cells)",
            details={"index": index, "cell_count": cell_count},
            status_code=404
        )


class ImageSizeError(DomainError):
    """Rendered image exceeds the GIF 16-bit dimension fields"""
    def __init__(self, width: int, height: int, maximum: int):
        super().__init__(
            code="IMAGE_TOO_LARGE",
            message=f"Image size {width}x{height} exceeds the GIF limit of {maximum} pixels per side",
            details={"width": width, "height": height, "max": maximum},
            status_code=422
        )
