"""
Process-wide registry of pending import substitutions.

Each entry says: "the next time module ``owner`` imports ``name``, hand it
``replacement`` instead". Entries are keyed by the canonical name of the
replaced module and consumed exactly once, and only by their owner.

The registry is shared mutable state for the whole process. It is not
thread-safe and must be empty between two ``mock_load`` calls; tests that
hold pending substitutions for the same module must not run concurrently.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubstitutionEntry:
    """
    A pending replacement for one dependency of one module.

    Attributes:
        specifier: Dependency specifier as written by the test
        replacement: Value handed to the owner instead of the real module
        owner: Canonical name of the only module allowed to receive it
    """

    specifier: str
    replacement: Any
    owner: str


class SubstitutionRegistry:
    """
    Registry mapping canonical module names to pending substitutions.

    At most one entry exists per name; registering the same name again
    replaces the earlier entry (last registration wins).
    """

    def __init__(self):
        """Initialize empty registry."""
        self._entries: Dict[str, SubstitutionEntry] = {}

    def register(self, name: str, entry: SubstitutionEntry) -> None:
        """
        Register a substitution, overwriting any pending one for ``name``.

        Args:
            name: Canonical name of the module being replaced
            entry: Substitution to apply
        """
        previous = self._entries.get(name)
        if previous is not None:
            logger.debug(
                f"Overwriting pending substitution for {name} "
                f"(was '{previous.specifier}' for {previous.owner})"
            )
        self._entries[name] = entry

    def try_consume(self, name: str, requester: Optional[str]) -> Tuple[bool, Any]:
        """
        Consume the substitution for ``name`` if ``requester`` owns it.

        Args:
            name: Canonical name of the requested module
            requester: Canonical name of the importing module

        Returns:
            ``(True, replacement)`` when the entry was consumed, otherwise
            ``(False, None)`` with the entry left in place for its owner
        """
        entry = self._entries.get(name)
        if entry is None or requester is None or entry.owner != requester:
            return False, None
        del self._entries[name]
        return True, entry.replacement

    def get(self, name: str) -> Optional[SubstitutionEntry]:
        """Return the pending entry for ``name`` without consuming it."""
        return self._entries.get(name)

    def is_empty(self) -> bool:
        return not self._entries

    def pending_specifiers(self) -> List[str]:
        """Specifiers of all pending entries, in registration order."""
        return [entry.specifier for entry in self._entries.values()]

    def pending_names(self) -> List[str]:
        return list(self._entries)

    def discard(self, names: Iterable[str]) -> List[SubstitutionEntry]:
        """
        Remove pending entries without consuming them.

        Args:
            names: Canonical names to drop (missing names are ignored)

        Returns:
            The entries that were still pending
        """
        dropped = []
        for name in names:
            entry = self._entries.pop(name, None)
            if entry is not None:
                dropped.append(entry)
        return dropped

    def clear(self) -> None:
        """Drop every pending entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries


_registry = SubstitutionRegistry()


def get_registry() -> SubstitutionRegistry:
    """Return the process-wide substitution registry."""
    return _registry


__all__ = ["SubstitutionEntry", "SubstitutionRegistry", "get_registry"]
