"""Custom exceptions for clearer error handling across the library."""


class TechnicalAnalysisError(Exception):
    """Base exception for all library-specific errors."""


class ValidationError(TechnicalAnalysisError):
    """Raised when input bars or indicator options fail validation."""


class DataLoadError(TechnicalAnalysisError):
    """Raised when historical bars cannot be loaded."""


class ConfigError(TechnicalAnalysisError):
    """Raised when environment configuration is invalid."""
