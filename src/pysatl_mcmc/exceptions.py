"""
Errors raised by the state, distribution and operator layers.

Operators treat :class:`DomainViolation` as a rejected proposal. The other
errors are hard failures that surface to the caller.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class DomainViolation(ValueError):
    """
    Attempt to write a value outside a tensor's domain or bounds.

    Parameters
    ----------
    value : object
        Rejected value.
    domain_name : str
        Name of the domain (or bounded range) that rejected it.
    index : int or None, default None
        Element index that was being written.
    """

    def __init__(self, value: object, domain_name: str, index: int | None = None) -> None:
        self.value = value
        self.domain_name = domain_name
        self.index = index
        where = "" if index is None else f" at index {index}"
        super().__init__(f"Value {value!r}{where} is not valid for domain {domain_name}")


class NotImplementedCharacteristic(NotImplementedError):
    """A distribution has no closed form for the requested characteristic."""

    def __init__(self, characteristic: str, distribution: str) -> None:
        self.characteristic = characteristic
        self.distribution = distribution
        super().__init__(f"{characteristic} is not implemented for {distribution}")


class ConfigurationError(ValueError):
    """Malformed hyperparameter combination or component setup."""


class SamplingRetryError(RuntimeError):
    """Rejection resampling did not produce a valid value within its retry budget."""

    def __init__(self, retries: int, index: int) -> None:
        self.retries = retries
        self.index = index
        super().__init__(
            f"Could not draw a valid value for element {index} in {retries} attempts"
        )


__all__ = [
    "DomainViolation",
    "NotImplementedCharacteristic",
    "ConfigurationError",
    "SamplingRetryError",
]
