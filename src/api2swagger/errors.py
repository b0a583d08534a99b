"""Exception hierarchy for swagger generation."""


class SwaggerGenError(Exception):
    """Base class for every error raised by api2swagger."""


class ConfigurationError(SwaggerGenError):
    """Raised when the generator is configured with unsupported values."""


class MalformedWrapperError(SwaggerGenError):
    """Raised when the outer response wrapper description cannot be used."""


class SpecLoadError(SwaggerGenError):
    """Raised when an input document is not a parsed API specification."""
