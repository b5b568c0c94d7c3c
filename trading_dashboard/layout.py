"""Widget grid ordering."""

import logging
from typing import Iterable, Optional

from .config import DEFAULT_LAYOUT, WidgetId

logger = logging.getLogger(__name__)

Layout = tuple[WidgetId, ...]


def parse_drag_index(payload: object) -> Optional[int]:
    """Turn a drag payload into a source index, or None if it is not numeric."""
    if isinstance(payload, bool):
        return None
    if isinstance(payload, int):
        return payload
    if isinstance(payload, str):
        try:
            return int(payload.strip())
        except ValueError:
            return None
    return None


def move(layout: Layout, from_index: object, to_index: int) -> Layout:
    """Move the widget at from_index so it lands at to_index.

    The widget is removed first and then inserted at to_index of the shorter
    sequence, so moving right lands one slot further than in the original
    ordering would suggest. An invalid from_index returns the layout
    unchanged; to_index is clamped to the valid range.
    """
    if (
        not isinstance(from_index, int)
        or isinstance(from_index, bool)
        or not 0 <= from_index < len(layout)
    ):
        logger.debug("Ignoring move from invalid index %r", from_index)
        return layout

    items = list(layout)
    widget = items.pop(from_index)
    to_index = min(max(to_index, 0), len(layout) - 1)
    items.insert(to_index, widget)
    return tuple(items)


class WidgetLayoutManager:
    """Holds the current widget ordering of the dashboard."""

    def __init__(self, layout: Iterable[WidgetId] = DEFAULT_LAYOUT) -> None:
        layout = tuple(WidgetId(w) for w in layout)
        if len(layout) != len(WidgetId) or set(layout) != set(WidgetId):
            raise ValueError(
                f"Layout must contain each widget exactly once, got "
                f"{[w.value for w in layout]}"
            )
        self.layout: Layout = layout

    def move_widget(self, from_index: object, to_index: int) -> bool:
        """Reorder the grid. Returns True if the ordering changed."""
        updated = move(self.layout, from_index, to_index)
        if updated == self.layout:
            return False
        self.layout = updated
        return True
