class InitresError(Exception):
    """Base exception for initres."""

    pass


class ConfigurationError(InitresError):
    """Raised when a usage source cannot be configured from its endpoint URI."""

    pass


class BackendQueryError(InitresError):
    """Raised when the metrics backend fails to list definitions or return datapoints."""

    pass


class EmptyResultError(InitresError):
    """Raised when no usable samples are available to compute a percentile."""

    pass


class UnsupportedResourceError(InitresError, ValueError):
    """Raised for resource kinds other than CPU and memory."""

    pass
