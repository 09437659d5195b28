"""
Extension Policy Engine Module

Decides whether an extension or filename is blocked and owns every mutation
of the fixed and custom extension lists.
"""

import logging
import re
from typing import TYPE_CHECKING, Dict, List, Mapping

from .config import ExtGuardConfig
from .exceptions import (
    DuplicateRecordError,
    ExtensionAlreadyExistsError,
    ExtensionConflictError,
    ExtensionLimitExceededError,
    ExtensionNotFoundError,
    InvalidExtensionError,
)
from .extensions import extract_candidate_extensions, normalize_extension
from .models import CustomExtension, FixedExtensionSetting, utcnow
from .stores.base import PolicyStore

if TYPE_CHECKING:
    from .storage_service import StorageService


logger = logging.getLogger(__name__)

_VALID_EXTENSION = re.compile(r"^[a-z0-9]+$")


class ExtensionPolicyEngine:
    """
    Blocklist engine over a fixed extension vocabulary and a capped custom list.

    A single token resolves as follows: a fixed extension returns its block
    flag; otherwise a custom extension is blocked; anything else is allowed.
    A filename is blocked as soon as any of its candidate extensions is,
    evaluated left to right.

    When a mutation newly blocks an extension, the engine calls
    ``storage_service.delete_files_by_extension`` after the policy change has
    been persisted. Failures of that call are logged and never undo or fail
    the mutation.
    """

    def __init__(
        self,
        store: PolicyStore,
        storage_service: "StorageService | None" = None,
        config: ExtGuardConfig | None = None,
    ):
        """
        Args:
            store (PolicyStore): Persistence for fixed and custom extensions.
            storage_service (StorageService | None): Collaborator notified when
                an extension becomes blocked. ``None`` disables cascading deletion.
            config (ExtGuardConfig | None): Fixed vocabulary and limits.
        """
        self.store = store
        self.storage_service = storage_service
        self.config = config or ExtGuardConfig()

    def initialize_fixed_extensions(self) -> List[FixedExtensionSetting]:
        """
        Seed one setting per configured fixed extension that is not stored yet.

        Existing settings keep their current block flag.

        Returns:
            List[FixedExtensionSetting]: The settings created by this call.
        """
        created = []
        for extension, blocked in self.config.fixed_extensions.items():
            token = normalize_extension(extension)
            if self.store.find_fixed_extension(token) is not None:
                continue
            try:
                created.append(
                    self.store.save_fixed_setting(
                        FixedExtensionSetting(extension=token, is_blocked=blocked)
                    )
                )
            except DuplicateRecordError:
                logger.debug("Fixed extension %s seeded concurrently", token)

        if created:
            logger.info(
                "Seeded %s fixed extensions: %s",
                len(created),
                ", ".join(s.extension for s in created),
            )
        return created

    def get_all_fixed_extension_settings(self) -> List[FixedExtensionSetting]:
        return self.store.find_all_fixed_extensions()

    def get_fixed_extension_states(self) -> Dict[str, bool]:
        """Return a mapping of every fixed extension to its block flag."""
        return {
            setting.extension: setting.is_blocked
            for setting in self.store.find_all_fixed_extensions()
        }

    def get_all_custom_extensions(self) -> List[CustomExtension]:
        return self.store.find_all_custom_extensions()

    def get_all_blocked_extensions(self) -> List[str]:
        """
        List every currently blocked extension.

        Returns:
            List[str]: Blocked fixed extensions in store order, followed by all
            custom extensions in store order.
        """
        fixed = [
            setting.extension
            for setting in self.store.find_all_fixed_extensions()
            if setting.is_blocked
        ]
        custom = [entry.extension for entry in self.store.find_all_custom_extensions()]
        return fixed + custom

    def is_extension_blocked(
        self, extension: str, fixed_states: Mapping[str, bool] | None = None
    ) -> bool:
        """
        Resolve the block status of a single extension token.

        Args:
            extension (str): Raw or normalized extension token.
            fixed_states (Mapping[str, bool] | None): Pre-fetched fixed block
                flags. When given, it replaces the fixed-setting lookup.

        Returns:
            bool: True if uploads with this extension must be rejected.
        """
        token = normalize_extension(extension)
        if not token:
            return False

        if fixed_states is not None:
            if token in fixed_states:
                return bool(fixed_states[token])
        else:
            setting = self.store.find_fixed_extension(token)
            if setting is not None:
                return setting.is_blocked

        return self.store.find_custom_extension(token) is not None

    def find_blocked_extension(
        self, filename: str | None, fixed_states: Mapping[str, bool] | None = None
    ) -> str | None:
        """
        Return the first blocked candidate extension of a filename.

        Args:
            filename (str | None): Client-supplied filename.
            fixed_states (Mapping[str, bool] | None): Optional pre-fetched
                fixed block flags, see :meth:`is_extension_blocked`.

        Returns:
            str | None: The offending extension, or None when every candidate
            is allowed (including names without an extension).
        """
        for token in extract_candidate_extensions(filename):
            if self.is_extension_blocked(token, fixed_states):
                return token
        return None

    def is_filename_blocked(
        self, filename: str | None, fixed_states: Mapping[str, bool] | None = None
    ) -> bool:
        return self.find_blocked_extension(filename, fixed_states) is not None

    def update_fixed_extension_setting(
        self, extension: str, blocked: bool
    ) -> FixedExtensionSetting:
        """
        Toggle the block flag of a fixed extension.

        Switching from allowed to blocked deletes the unprotected stored files
        with that extension. Switching back never restores anything.

        Args:
            extension (str): Fixed extension to update.
            blocked (bool): New block flag.

        Returns:
            FixedExtensionSetting: The persisted setting.

        Raises:
            ExtensionNotFoundError: If the extension is not in the fixed vocabulary.
        """
        token = normalize_extension(extension)
        setting = self.store.find_fixed_extension(token)
        if setting is None:
            raise ExtensionNotFoundError(
                f"Fixed extension '{token}' not found", extension=token
            )

        was_blocked = setting.is_blocked
        setting.is_blocked = blocked
        setting.updated_at = utcnow()
        saved = self.store.save_fixed_setting(setting)

        logger.info(
            "Fixed extension %s set to %s",
            token,
            "blocked" if blocked else "allowed",
        )

        if blocked and not was_blocked:
            self._delete_stored_files(token)

        return saved

    def add_custom_extension(self, extension: str) -> CustomExtension:
        """
        Add an extension to the custom blocklist.

        Stored files with the new extension are deleted afterwards, except
        protected ones.

        Args:
            extension (str): Raw extension as entered by an administrator.

        Returns:
            CustomExtension: The persisted entry.

        Raises:
            InvalidExtensionError: If the token is empty, too long or not alphanumeric.
            ExtensionAlreadyExistsError: If the token is already a custom extension.
            ExtensionConflictError: If the token is a fixed extension.
            ExtensionLimitExceededError: If the custom list is full.
        """
        token = normalize_extension(extension)
        self._validate_custom_token(token)

        if self.store.find_custom_extension(token) is not None:
            raise ExtensionAlreadyExistsError(token)

        if self.store.find_fixed_extension(token) is not None:
            raise ExtensionConflictError(token)

        limit = self.config.limits.max_custom_extensions
        if self.store.count_custom_extensions() >= limit:
            raise ExtensionLimitExceededError(token, limit)

        try:
            saved = self.store.save_custom_extension(CustomExtension(extension=token))
        except DuplicateRecordError as err:
            raise ExtensionAlreadyExistsError(token) from err

        logger.info("Custom extension added: %s", token)
        self._delete_stored_files(token)
        return saved

    def delete_custom_extension(self, extension_id: int) -> None:
        """
        Remove a custom extension permanently.

        Raises:
            ExtensionNotFoundError: If no custom extension has this id.
        """
        entry = self.store.find_custom_extension_by_id(extension_id)
        if entry is None:
            raise ExtensionNotFoundError(f"Custom extension {extension_id} not found")

        self.store.delete_custom_extension(extension_id)
        logger.info("Custom extension deleted: %s", entry.extension)

    def _validate_custom_token(self, token: str) -> None:
        if not token:
            raise InvalidExtensionError("Extension cannot be empty")

        max_length = self.config.limits.max_extension_length
        if len(token) > max_length:
            raise InvalidExtensionError(
                f"Extension '{token}' exceeds {max_length} characters", extension=token
            )

        if not _VALID_EXTENSION.match(token):
            raise InvalidExtensionError(
                f"Extension '{token}' may only contain letters and digits",
                extension=token,
            )

        if token.isdigit():
            raise InvalidExtensionError(
                f"Extension '{token}' is numeric and would never match a filename",
                extension=token,
            )

    def _delete_stored_files(self, extension: str) -> None:
        if self.storage_service is None:
            return

        try:
            self.storage_service.delete_files_by_extension(extension)
        except Exception as err:
            logger.exception(
                "Cascading deletion for extension %s failed: %s", extension, err
            )
