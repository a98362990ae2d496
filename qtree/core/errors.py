"""
Exceptions raised by the quadtree codec.

All of them derive from QTException so that callers (the API and the CLI)
can catch codec failures in one place and decide how to present them.
"""


class QTException(Exception):
    """Base class for quadtree codec errors"""
    pass


class FormatError(QTException, ValueError):
    """The linear (compressed) data is truncated or malformed"""
    pass


class ConfigError(QTException, ValueError):
    """The image dimensions are not a power-of-two square"""
    pass


class StateError(QTException, RuntimeError):
    """The tree was used before it was compressed or decoded"""
    pass
