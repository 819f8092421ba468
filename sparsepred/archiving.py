"""
Archiving: named-field persistence for predictors.

An ``IArchivable`` object writes its state into an ``Archiver`` as a set of
named fields and rebuilds itself from an ``Unarchiver`` that reads the same
fields back. Nested archivable objects are stored as nested field sets.

The concrete encoding used here is a plain ``dict`` that round-trips through
JSON. Objects never see the encoding, only the named fields, so a decorator
that delegates persistence to the object it wraps adds nothing to the
archive.

    >>> archiver = Archiver()
    >>> predictor.write_to_archive(archiver)
    >>> text = archiver.to_json()
    >>> restored = LinearPredictor()
    >>> restored.read_from_archive(Unarchiver.from_json(text))
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

import numpy as np

from sparsepred.exceptions import ArchiveError
from sparsepred.utils import to_plain

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_MISSING = object()


class IArchivable(ABC):
    """Interface for objects that persist themselves through named fields."""

    @abstractmethod
    def write_to_archive(self, archiver: Archiver) -> None:
        """Add the object's fields to ``archiver``."""

    @abstractmethod
    def read_from_archive(self, unarchiver: Unarchiver) -> None:
        """Set the object's state from the fields held by ``unarchiver``."""


# =============================================================================
# Write side
# =============================================================================

class Archiver:
    """
    Write sink collecting named fields.

    Values may be Python scalars, strings, lists, numpy arrays or torch
    tensors (stored as lists), or ``IArchivable`` objects (stored as a
    nested field set).
    """

    def __init__(self) -> None:
        self._fields: Dict[str, Any] = {}

    def archive(self, name: str, value: Any) -> None:
        """
        Store ``value`` under ``name``.

        Parameters
        ----------
        name : str
            Field name. Writing the same name twice overwrites the field.
        value :
            Value to store.
        """
        if isinstance(value, IArchivable):
            child = Archiver()
            value.write_to_archive(child)
            self._fields[name] = child.to_dict()
        else:
            self._fields[name] = to_plain(value)

    def __setitem__(self, name: str, value: Any) -> None:
        self.archive(name, value)

    def __contains__(self, name: str) -> bool:
        return name in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    def to_dict(self) -> Dict[str, Any]:
        """Return a copy of the collected fields."""
        return dict(self._fields)

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self._fields, indent=indent, sort_keys=True)

    def save(self, path: PathLike) -> None:
        """Write the collected fields to ``path`` as JSON."""
        Path(path).write_text(self.to_json(indent=2), encoding="utf-8")
        logger.debug("Archive with %d field(s) saved to %s", len(self._fields), path)


# =============================================================================
# Read side
# =============================================================================

class Unarchiver:
    """Read source over a set of named fields produced by an ``Archiver``."""

    def __init__(self, fields: Dict[str, Any]) -> None:
        if not isinstance(fields, dict):
            raise ValueError(f"Archive fields must be a dict, got {type(fields).__name__}.")
        self._fields = fields

    @classmethod
    def from_json(cls, text: str) -> Unarchiver:
        return cls(json.loads(text))

    @classmethod
    def load(cls, path: PathLike) -> Unarchiver:
        """Read an archive previously written by ``Archiver.save``."""
        unarchiver = cls.from_json(Path(path).read_text(encoding="utf-8"))
        logger.debug("Archive with %d field(s) loaded from %s", len(unarchiver._fields), path)
        return unarchiver

    def unarchive(self, name: str, default: Any = _MISSING) -> Any:
        """
        Return the value stored under ``name``.

        Parameters
        ----------
        name : str
            Field name.
        default : optional
            Returned when the field is absent. Without it, a missing field
            raises.

        Raises
        ------
        ArchiveError
            If the field is absent and no default was given.
        """
        if name in self._fields:
            return self._fields[name]
        if default is _MISSING:
            raise ArchiveError(f"Archive has no field named '{name}'.")
        return default

    def __getitem__(self, name: str) -> Any:
        return self.unarchive(name)

    def __contains__(self, name: str) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def unarchive_array(self, name: str, dtype: Any = np.float64) -> np.ndarray:
        """Return the field ``name`` as a numpy array of ``dtype``."""
        return np.asarray(self.unarchive(name), dtype=dtype)

    def unarchive_object(self, name: str, obj: IArchivable) -> IArchivable:
        """
        Restore ``obj`` in place from the nested field set stored under ``name``.

        Returns
        -------
        IArchivable
            ``obj`` itself, for chaining.
        """
        obj.read_from_archive(Unarchiver(self.unarchive(name)))
        return obj


# =============================================================================
# Helpers
# =============================================================================

def archive_object(obj: IArchivable) -> Dict[str, Any]:
    """Return the field set ``obj`` writes to a fresh ``Archiver``."""
    archiver = Archiver()
    obj.write_to_archive(archiver)
    return archiver.to_dict()


def restore_object(obj: IArchivable, fields: Dict[str, Any]) -> IArchivable:
    """Read ``fields`` into ``obj`` and return it."""
    obj.read_from_archive(Unarchiver(fields))
    return obj
