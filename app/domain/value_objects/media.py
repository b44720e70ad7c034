"""Media value objects: asset references and the ordered set a record carries.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class AssetReference:
    """One photograph, known by the locator the remote store returned.

    The locator is the only persisted form. The store identifier is derived
    from it on demand (see identifier_extractor) and never stored.
    """

    locator: str

    def __post_init__(self) -> None:
        if not isinstance(self.locator, str) or not self.locator.strip():
            raise ValueError("Asset locator must be a non-empty string")


@dataclass(frozen=True)
class AttachmentSet:
    """Ordered photo references of one record.

    Insertion order is display order. Duplicates are kept as-is.
    """

    references: tuple[AssetReference, ...] = ()

    @classmethod
    def from_locators(cls, locators: Iterable[str]) -> "AttachmentSet":
        """Build a set from raw locator strings, preserving order."""
        return cls(tuple(AssetReference(loc) for loc in locators))

    @classmethod
    def empty(cls) -> "AttachmentSet":
        return cls(())

    @property
    def locators(self) -> list[str]:
        """Locators in display order."""
        return [ref.locator for ref in self.references]

    @property
    def is_empty(self) -> bool:
        return not self.references

    def orphans(self, replacement: "AttachmentSet") -> list[AssetReference]:
        """Return references in self that replacement no longer holds.

        Compared by locator equality. Each orphaned locator appears once, in
        first-seen order, so each is submitted for deletion exactly once.
        """
        kept = {ref.locator for ref in replacement.references}
        seen: set[str] = set()
        result: list[AssetReference] = []
        for ref in self.references:
            if ref.locator in kept or ref.locator in seen:
                continue
            seen.add(ref.locator)
            result.append(ref)
        return result

    def __iter__(self) -> Iterator[AssetReference]:
        return iter(self.references)

    def __len__(self) -> int:
        return len(self.references)
