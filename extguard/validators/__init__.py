"""Upload validators."""

from .base import BaseValidator
from .extension_validator import ExtensionPolicyValidator
from .size_validator import FileSizeValidator

__all__ = ["BaseValidator", "ExtensionPolicyValidator", "FileSizeValidator"]
