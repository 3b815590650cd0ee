# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Type tags and their ancestry.

Registry keys are fully-qualified type names (``module.QualName``). Classes
carry their ancestry in their MRO; bare names (legacy callers passing a type
name instead of an entity) are looked up in a ``TypeCatalog`` that is
populated once at startup.
"""

from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, Tuple


def type_name(cls: type) -> str:
    """Get the fully-qualified name of a class.

    Parameters
    ----------
    cls : type
        The class.

    Returns
    -------
    str
        ``<module>.<qualname>``
    """
    return f"{cls.__module__}.{cls.__qualname__}"


@lru_cache(maxsize=256)
def type_ancestry(cls: type) -> Tuple[str, ...]:
    """Get the names of a class and all its ancestors, most specific first.

    Parameters
    ----------
    cls : type
        The class.

    Returns
    -------
    Tuple[str, ...]
        The fully-qualified names in MRO order.
    """
    return tuple(type_name(klass) for klass in cls.__mro__)


class TypeCatalog:
    """Tag to parent-tags table for entities known only by name."""

    def __init__(self) -> None:
        self._parents: Dict[str, List[str]] = {}
        self._cache: Dict[str, Tuple[str, ...]] = {}

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, Iterable[str]]
    ) -> "TypeCatalog":
        """Build a catalog from ``{tag: [parent tags]}``.

        Parameters
        ----------
        mapping : Mapping[str, Iterable[str]]
            The declarations.

        Returns
        -------
        TypeCatalog
            The catalog.
        """
        catalog = cls()
        for tag, parents in mapping.items():
            catalog.add_tag(tag, parents)
        return catalog

    def add_tag(self, tag: str, parents: Iterable[str] = ()) -> None:
        """Declare a tag and (some of) its direct parents.

        Parameters
        ----------
        tag : str
            The type tag.
        parents : Iterable[str]
            Its direct parent tags.

        Raises
        ------
        TypeError
            If ``parents`` is a single string instead of an iterable of tags.
        """
        if isinstance(parents, str):
            raise TypeError(
                f'Parents of "{tag}" must be a list of tags, not a string.'
            )
        known = self._parents.setdefault(tag, [])
        for parent in parents:
            if parent != tag and parent not in known:
                known.append(parent)
        self._cache.clear()

    def add_type(self, cls: type) -> str:
        """Declare a class and its whole MRO.

        Parameters
        ----------
        cls : type
            The class.

        Returns
        -------
        str
            The tag of the class.
        """
        for klass in cls.__mro__:
            self.add_tag(
                type_name(klass), [type_name(base) for base in klass.__bases__]
            )
        return type_name(cls)

    def ancestry(self, tag: str) -> Tuple[str, ...]:
        """Get a tag followed by all its transitive parents.

        Parameters
        ----------
        tag : str
            The type tag.

        Returns
        -------
        Tuple[str, ...]
            The tag and its ancestors (only the tag if unknown).
        """
        cached = self._cache.get(tag)
        if cached is not None:
            return cached
        seen: List[str] = []
        stack = [tag]
        while stack:
            current = stack.pop(0)
            if current in seen:
                continue
            seen.append(current)
            stack.extend(self._parents.get(current, []))
        result = tuple(seen)
        self._cache[tag] = result
        return result

    def __contains__(self, tag: object) -> bool:
        return tag in self._parents

    def __len__(self) -> int:
        return len(self._parents)


__all__ = ["TypeCatalog", "type_ancestry", "type_name"]
