# Define kerfadjust specific exceptions


# Base kerfadjust exceptions
class KerfAdjustError(Exception):
    pass


class BadFileError(KerfAdjustError):
    """Abort loading a malformed file"""


class KerfAdjustmentError(KerfAdjustError):
    """
    Raised when a drawing entity or contour cannot be kerf adjusted.

    Every subclass carries a human readable `reason`. These failures are local to
    a single entity or contour, the caller decides whether to skip, substitute the
    original geometry or abort.
    """

    reason = "Unknown error"

    def __str__(self):
        return f"Kerf Adjustment Error: {self.reason}"


class UnsupportedEntity(KerfAdjustmentError):
    def __init__(self, kind):
        KerfAdjustmentError.__init__(self, kind)
        self.kind = kind
        self.reason = f"Unsupported Entity (entity type: {kind})"


class ThreeDimensionalEntity(KerfAdjustmentError):
    reason = "3D entity found. Only 2D DXF files are supported"


class CannotOffsetOpenContour(KerfAdjustmentError):
    reason = (
        "Attempting to offset an open contour. Only closed contours can be offset."
    )


class CannotOffsetEmptyContour(KerfAdjustmentError):
    reason = (
        "Attempting to offset an empty contour. A contour must have at least one "
        "entity in it in order to be offset."
    )


class CannotOffsetEntity(KerfAdjustmentError):
    def __init__(self, kind):
        KerfAdjustmentError.__init__(self, kind)
        self.kind = kind
        self.reason = f"Cannot offset entity (entity type: {kind})"


class CannotConnectContourAfterAdjustment(KerfAdjustmentError):
    reason = (
        "Successfully adjusted contour, but could not connect it to the rest of "
        "the contour"
    )
