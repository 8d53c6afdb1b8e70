from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from model import AnyElement


class ElementStore:
    """Ordered element collection; order is z-order, later elements are on top."""

    def __init__(self) -> None:
        self._elements: List[AnyElement] = []
        self.next_id = 1

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[AnyElement]:
        return iter(self._elements)

    def __getitem__(self, index: int) -> AnyElement:
        return self._elements[index]

    @property
    def elements(self) -> List[AnyElement]:
        return list(self._elements)

    def add(self, element: AnyElement) -> int:
        element.id = self.next_id
        self._elements.append(element)
        self.next_id += 1
        return element.id

    def remove(self, index: int) -> AnyElement:
        # Later indices shift down by one.
        return self._elements.pop(index)

    def replace_all(self, elements: Iterable[AnyElement]) -> None:
        self._elements = list(elements)
        self.next_id = max((element.id for element in self._elements), default=0) + 1

    def clear(self) -> None:
        self._elements = []
        self.next_id = 1

    def index_of(self, element_id: int) -> Optional[int]:
        for index, element in enumerate(self._elements):
            if element.id == element_id:
                return index
        return None
