# SPDX-License-Identifier: MIT

from typing import Iterable, Iterator

from daygrid.model.entity_id import EntityId


class Selection:
    """The set of selected event ids on the displayed calendar."""

    def __init__(self) -> None:
        self._ids: set[EntityId] = set()

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[EntityId]:
        return iter(sorted(self._ids))

    @property
    def ids(self) -> set[EntityId]:
        return set(self._ids)

    def click(self, event_id: EntityId, shift: bool = False) -> None:
        """
        Apply a click on an event.

        With shift held the event's membership is toggled. Without it, clicking
        the sole selected event deselects it and clicking anything else makes
        it the only selected event.
        """
        if shift:
            self.toggle(event_id)
        elif self._ids == {event_id}:
            self._ids.clear()
        else:
            self.replace([event_id])

    def toggle(self, event_id: EntityId) -> None:
        if event_id in self._ids:
            self._ids.discard(event_id)
        else:
            self._ids.add(event_id)

    def replace(self, event_ids: Iterable[EntityId]) -> None:
        self._ids = set(event_ids)

    def discard(self, event_id: EntityId) -> None:
        self._ids.discard(event_id)

    def clear(self) -> None:
        self._ids.clear()
