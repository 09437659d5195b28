"""
Base Validator Module

Contains the base class shared by the upload validators.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..config import ExtGuardConfig


class BaseValidator(ABC):
    """
    Abstract base class for upload validators.

    Stores the shared configuration and requires subclasses to implement
    ``validate``.

    Attributes:
        config (ExtGuardConfig): Shared configuration for the validator.
    """

    def __init__(self, config: "ExtGuardConfig"):
        """
        Initialize the validator with the provided configuration.

        Args:
            config (ExtGuardConfig): Limits and fixed vocabulary to apply.
        """
        self.config = config

    @abstractmethod
    def validate(self, *args, **kwargs) -> Any:
        """
        Validate provided data using subclass-specific logic.

        Args:
            *args: Positional arguments required by the concrete validator.
            **kwargs: Keyword arguments required by the concrete validator.

        Returns:
            Any: The validated result or outcome defined by subclasses.
        """
        pass
