"""
Custom exception hierarchy for the leafwater package.
Provides clear error categories and rich error information.
"""
from typing import Optional, Any, Dict
from dataclasses import dataclass


@dataclass
class ErrorContext:
    """Context information for errors"""
    component: Optional[str] = None
    operation: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class LeafwaterError(Exception):
    """Base exception for all leafwater errors"""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def __str__(self) -> str:
        context_str = ""
        if self.context.component:
            context_str += f" [Component: {self.context.component}]"
        if self.context.operation:
            context_str += f" [Operation: {self.context.operation}]"

        return f"{self.__class__.__name__}: {self.message}{context_str}"


# Configuration errors
class ConfigurationError(LeafwaterError):
    """Configuration error"""
    pass


class ConfigurationMismatchError(ConfigurationError):
    """Soil method paired with soil data it cannot use"""
    pass


# Physics model errors
class PhysicsModelError(LeafwaterError):
    """Base class for physics model errors"""
    pass


class ParameterError(PhysicsModelError):
    """Invalid model parameters"""
    pass


class InvertedThresholdError(ParameterError):
    """Lower threshold is not below the upper threshold of a linear ramp"""
    pass


class UndefinedEffectError(PhysicsModelError):
    """The selected formula has no defined result for these parameters"""
    pass


def handle_exception(exc: Exception, context: Optional[ErrorContext] = None) -> LeafwaterError:
    """
    Wrap generic exceptions in the LeafwaterError hierarchy.
    Useful for catching and categorizing errors raised by numeric code.
    """
    if isinstance(exc, LeafwaterError):
        return exc

    error_map = {
        ZeroDivisionError: ParameterError,
        OverflowError: ParameterError,
        ValueError: ParameterError,
        TypeError: ConfigurationError,
        KeyError: ConfigurationError,
    }

    for exc_type, leafwater_exc_type in error_map.items():
        if isinstance(exc, exc_type):
            return leafwater_exc_type(str(exc), context)

    return LeafwaterError(str(exc), context)
