"""
Extension Guard Configuration Module

Holds the fixed extension vocabulary and the numeric limits enforced by the
policy engine and upload validator.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Mapping

from .exceptions import ConfigValidationError, ExtGuardConfigurationError


logger = logging.getLogger(__name__)

_EXTENSION_PATTERN = re.compile(r"^[a-z0-9]+$")


@dataclass
class PolicyLimits:
    """
    Numeric limits applied to uploads and to the custom extension list.

    Attributes:
        max_file_size (int): Largest accepted upload, in bytes.
        max_custom_extensions (int): Hard cap on administrator-added extensions.
        max_extension_length (int): Longest accepted custom extension token.
        size_probe_bytes (int): Bytes read up front when an upload reports no size.
    """

    max_file_size: int = 100 * 1024 * 1024  # 100MB
    max_custom_extensions: int = 200
    max_extension_length: int = 20
    size_probe_bytes: int = 8192


class ExtGuardConfig:
    """
    Configuration for the extension policy engine and upload validation.

    The fixed vocabulary maps each historically dangerous extension to the
    block flag it is seeded with. Membership is closed once seeded; only the
    flag can be toggled at runtime.
    """

    DEFAULT_FIXED_EXTENSIONS: Dict[str, bool] = {
        "bat": False,
        "cmd": False,
        "com": False,
        "cpl": False,
        "exe": False,
        "scr": False,
        "js": False,
    }

    def __init__(
        self,
        fixed_extensions: Mapping[str, bool] | None = None,
        limits: PolicyLimits | None = None,
    ):
        """
        Args:
            fixed_extensions (Mapping[str, bool] | None): Fixed vocabulary with
                initial block flags. Defaults to ``DEFAULT_FIXED_EXTENSIONS``.
            limits (PolicyLimits | None): Limits to enforce. Defaults to a new
                ``PolicyLimits`` instance.
        """
        self.fixed_extensions: Dict[str, bool] = dict(
            self.DEFAULT_FIXED_EXTENSIONS if fixed_extensions is None else fixed_extensions
        )
        self.limits = limits or PolicyLimits()

    def validate_configuration(self) -> List[ConfigValidationError]:
        """
        Check the configuration for inconsistencies.

        Returns:
            List[ConfigValidationError]: Every issue found, of any severity.
        """
        errors: List[ConfigValidationError] = []

        if not self.fixed_extensions:
            errors.append(
                ConfigValidationError(
                    error_type="empty_fixed_extensions",
                    message="No fixed extensions configured",
                    severity="warning",
                    component="fixed_extensions",
                    recommendation="Seed at least the common executable extensions (exe, bat, cmd)",
                )
            )

        for extension in self.fixed_extensions:
            if not _EXTENSION_PATTERN.match(extension):
                errors.append(
                    ConfigValidationError(
                        error_type="invalid_fixed_extension",
                        message=f"Fixed extension '{extension}' must be lowercase alphanumeric without a leading dot",
                        severity="error",
                        component="fixed_extensions",
                        recommendation=f"Use '{extension.strip().lstrip('.').lower()}'",
                    )
                )

        limit_fields = {
            "max_file_size": self.limits.max_file_size,
            "max_custom_extensions": self.limits.max_custom_extensions,
            "max_extension_length": self.limits.max_extension_length,
            "size_probe_bytes": self.limits.size_probe_bytes,
        }
        for name, value in limit_fields.items():
            if value <= 0:
                errors.append(
                    ConfigValidationError(
                        error_type="invalid_limit",
                        message=f"{name} must be positive, got {value}",
                        severity="error",
                        component="limits",
                    )
                )

        if self.limits.max_file_size > 1024 * 1024 * 1024:
            errors.append(
                ConfigValidationError(
                    error_type="large_file_size_limit",
                    message=f"max_file_size of {self.limits.max_file_size // (1024 * 1024)}MB is unusually large",
                    severity="warning",
                    component="limits",
                    recommendation="Keep upload limits at or below 1GB",
                )
            )

        return errors

    def validate_and_report(self, strict: bool = False) -> None:
        """
        Validate the configuration and log every finding.

        Args:
            strict (bool): When True, warnings are treated as failures too.

        Raises:
            ExtGuardConfigurationError: If errors (or, in strict mode, warnings)
                were found.
        """
        issues = self.validate_configuration()

        for issue in issues:
            if issue.severity == "error":
                logger.error("Configuration error: %s", issue.message)
            elif issue.severity == "warning":
                logger.warning("Configuration warning: %s", issue.message)
            else:
                logger.info("Configuration note: %s", issue.message)

        failing = [
            issue
            for issue in issues
            if issue.severity == "error" or (strict and issue.severity == "warning")
        ]
        if failing:
            raise ExtGuardConfigurationError(failing)
