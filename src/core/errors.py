"""Centre user insights exception hierarchy."""


class CentreUserInsightsError(Exception):
    """Base exception for all centre user insights failures."""


class ConfigurationError(CentreUserInsightsError):
    """Raised when no usable centre user data source is configured."""


class LoadError(CentreUserInsightsError):
    """Raised when the centre user dataset cannot be read or parsed."""
