"""Store of library objects keyed by uuid."""

from __future__ import annotations

from collections.abc import Iterator

from aplib.model import AplibObject, AplibType

_STORABLE = frozenset(
    {
        AplibType.ALBUM,
        AplibType.FOLDER,
        AplibType.MASTER,
        AplibType.VERSION,
        AplibType.VOLUME,
    }
)


class ObjectStore:
    """Albums, folders, masters, versions and volumes keyed by their uuid."""

    def __init__(self) -> None:
        self._objects: dict[str, AplibObject] = {}

    def add(self, obj: AplibObject) -> bool:
        """Store ``obj``, replacing any object with the same uuid.

        Return True if no object had that uuid; False when one was
        replaced, or when the object has no uuid or can't be stored.
        """
        if obj.obj_type() not in _STORABLE or obj.uuid is None:
            return False
        is_new = obj.uuid not in self._objects
        self._objects[obj.uuid] = obj
        return is_new

    def get(self, uuid: str) -> AplibObject | None:
        return self._objects.get(uuid)

    def parent_uuid(self, uuid: str) -> str | None:
        """Parent uuid of the object stored under ``uuid``."""
        obj = self._objects.get(uuid)
        return obj.parent() if obj is not None else None

    def __contains__(self, uuid: object) -> bool:
        return uuid in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[str]:
        return iter(self._objects)