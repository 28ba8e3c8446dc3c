"""Exceptions raised by LumenTrace."""


class LumenTraceError(Exception):
    """Base exception for all LumenTrace errors."""

    pass


class SceneConfigurationError(LumenTraceError):
    """
    Raised when a scene is malformed in a way no render can recover from.

    These errors abort the affected computation immediately; they are never
    retried and never turned into a fallback color.
    """

    pass


class NonInvertibleMatrixError(SceneConfigurationError):
    """Raised when a transform with a zero determinant has to be inverted."""

    def __init__(self, matrix, message=None):
        self.matrix = matrix
        if message is None:
            message = f"Matrix is not invertible (determinant is 0): {matrix!r}"
        super().__init__(message)


class DegenerateRayError(SceneConfigurationError):
    """Raised when a ray with a zero-length direction is intersected."""

    def __init__(self, ray, message=None):
        self.ray = ray
        if message is None:
            message = f"Ray direction is zero or close to zero: {ray!r}"
        super().__init__(message)
