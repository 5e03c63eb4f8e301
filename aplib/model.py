"""Common types shared by the objects found in a library."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class AplibType(Enum):
    """Kinds of objects stored in a library."""

    ALBUM = "album"
    FOLDER = "folder"
    KEYWORD = "keyword"
    MASTER = "master"
    VERSION = "version"
    VOLUME = "volume"


class AplibObject(ABC):
    """Base class for the library objects.

    Subclasses provide ``uuid`` and ``model_id`` attributes.
    """

    uuid: str | None = None
    model_id: int | None = None

    @abstractmethod
    def obj_type(self) -> AplibType:
        """Type of the object."""

    @abstractmethod
    def parent(self) -> str | None:
        """UUID of the parent object, if any."""

    def is_valid(self) -> bool:
        """An object is valid when it has a uuid."""
        return self.uuid is not None

    def get_model_id(self) -> int:
        """Numerical id in the model, 0 when unknown."""
        return self.model_id if self.model_id is not None else 0