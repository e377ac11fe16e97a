from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .model import Block, ListItem, OrderedList, UnorderedList

logger = logging.getLogger(__name__)


class ListState(Enum):
    NO_LIST = "no_list"
    IN_UNORDERED = "in_unordered"
    IN_ORDERED = "in_ordered"


@dataclass
class ListStateMachine:
    """Groups consecutive list-item lines into one list block.

    Every ``feed_*`` call returns the list it had to close before accepting
    the new item (or ``None``); ``flush`` closes whatever is open. The caller
    emits those blocks in order.
    """

    state: ListState = ListState.NO_LIST
    marker: str | None = None
    start: int = 0
    next_numeral: int = 0
    items: List[ListItem] = field(default_factory=list)

    def feed_unordered(self, marker: str, item: ListItem) -> Block | None:
        closed = None
        if self.state is not ListState.IN_UNORDERED or marker != self.marker:
            closed = self.flush()
            self.state = ListState.IN_UNORDERED
            self.marker = marker
        self.items.append(item)
        return closed

    def feed_ordered(self, numeral: int, item: ListItem) -> Block | None:
        closed = None
        if self.state is not ListState.IN_ORDERED:
            closed = self.flush()
            self.state = ListState.IN_ORDERED
            self.start = numeral
            self.next_numeral = numeral
        self.items.append(item)
        self.next_numeral += 1
        return closed

    def flush(self) -> Block | None:
        if self.state is ListState.NO_LIST:
            return None
        if self.state is ListState.IN_ORDERED:
            block: Block = OrderedList(start=self.start, items=self.items)
        else:
            block = UnorderedList(items=self.items)
        logger.debug("Closed %s with %d items", type(block).__name__, len(self.items))
        self.state = ListState.NO_LIST
        self.marker = None
        self.items = []
        return block
