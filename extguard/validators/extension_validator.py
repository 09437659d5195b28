"""
Extension Policy Validator Module

Turns the policy engine's decision for a filename into a validation verdict.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping

from .base import BaseValidator
from ..enums import BlockReason
from ..models import Allowed, Blocked, ValidationVerdict

if TYPE_CHECKING:
    from ..config import ExtGuardConfig
    from ..policy import ExtensionPolicyEngine


logger = logging.getLogger(__name__)


class ExtensionPolicyValidator(BaseValidator):
    """
    Checks every candidate extension of a filename against the current policy.

    Attributes:
        config: Shared configuration.
        engine: Policy engine that resolves each candidate extension.
    """

    def __init__(self, config: ExtGuardConfig, engine: ExtensionPolicyEngine):
        super().__init__(config)
        self.engine = engine

    def validate_extensions(
        self, filename: str, fixed_states: Mapping[str, bool] | None = None
    ) -> ValidationVerdict:
        """
        Resolve a filename to a verdict.

        Args:
            filename: Client-supplied filename.
            fixed_states: Optional pre-fetched fixed block flags.

        Returns:
            ``Blocked`` naming the first blocked candidate extension, or ``Allowed``.
        """
        blocked_extension = self.engine.find_blocked_extension(filename, fixed_states)
        if blocked_extension is None:
            return Allowed()

        logger.warning(
            "Blocked extension detected",
            extra={
                "error_type": "blocked_extension",
                "filename": filename,
                "extension": blocked_extension,
            },
        )
        return Blocked(
            reason=f"Blocked extension: {blocked_extension}",
            reason_kind=BlockReason.BLOCKED_EXTENSION,
            extension=blocked_extension,
        )

    def validate(
        self, filename: str, fixed_states: Mapping[str, bool] | None = None
    ) -> ValidationVerdict:
        return self.validate_extensions(filename, fixed_states)
