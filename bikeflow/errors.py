# bikeflow/errors.py


class BikeflowError(Exception):
    """Base class for everything the engine raises on purpose."""


class InvalidArgument(BikeflowError, ValueError):
    pass


class NotReady(BikeflowError, RuntimeError):
    pass


class SchemaError(BikeflowError, ValueError):
    """Trips CSV does not match any known column layout."""
