"""Window math for virtualized lists with uniform row heights."""

from __future__ import annotations

import math
from dataclasses import dataclass

from plotview.utils.settings import DEFAULT_SETTINGS, get_int_setting

DEFAULT_VIEWPORT_SIZE_FALLBACK = DEFAULT_SETTINGS['virtual_viewport_fallback']


class VirtualLayoutError(ValueError):
    """Raised when a virtual layout is configured with unusable values."""


class ItemCountError(ValueError):
    """Raised when a caller hands the engine a malformed item count."""


def _is_integer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class VirtualLayout:
    """Row geometry for one windowing session.

    Immutable: a new layout means re-initialising the renderer.
    """

    row_height: float
    overscan: int = 0
    viewport_size_fallback: float = DEFAULT_VIEWPORT_SIZE_FALLBACK

    def __post_init__(self):
        if isinstance(self.row_height, bool) or not isinstance(self.row_height, (int, float)):
            raise VirtualLayoutError(f"row_height must be a number, got {self.row_height!r}")
        if not self.row_height > 0:
            raise VirtualLayoutError(f"row_height must be > 0, got {self.row_height!r}")
        if not _is_integer(self.overscan) or self.overscan < 0:
            raise VirtualLayoutError(f"overscan must be a non-negative integer, got {self.overscan!r}")
        if not self.viewport_size_fallback >= 0:
            raise VirtualLayoutError(
                f"viewport_size_fallback must be >= 0, got {self.viewport_size_fallback!r}")

    @classmethod
    def from_settings(cls, kind: str = 'list') -> 'VirtualLayout':
        """Build a layout from the stored `virtual_*` settings.

        `kind` selects the row height key: 'list' or 'table'.
        """
        if kind not in ('list', 'table'):
            raise VirtualLayoutError(f"Unknown layout kind: {kind!r}")
        return cls(
            row_height=get_int_setting(f'virtual_{kind}_row_height'),
            overscan=get_int_setting('virtual_overscan'),
            viewport_size_fallback=get_int_setting('virtual_viewport_fallback'),
        )


@dataclass(frozen=True)
class VirtualWindow:
    """Rows to render plus the spacer sizes around them."""

    start_index: int
    end_index: int
    leading_spacer_size: float
    trailing_spacer_size: float

    @property
    def row_count(self) -> int:
        return self.end_index - self.start_index

    def indices(self) -> range:
        return range(self.start_index, self.end_index)

    def total_size(self, row_height: float) -> float:
        return self.leading_spacer_size + self.row_count * row_height + self.trailing_spacer_size

    def __contains__(self, index) -> bool:
        return self.start_index <= index < self.end_index


EMPTY_WINDOW = VirtualWindow(0, 0, 0, 0)


def compute_window(
    scroll_offset: float,
    viewport_size: float,
    item_count: int,
    row_height: float,
    overscan: int,
    viewport_size_fallback: float = DEFAULT_VIEWPORT_SIZE_FALLBACK,
) -> VirtualWindow:
    """Return the render window for a scroll position.

    The overscan margin is applied on both sides of the visible band. An
    unmeasured viewport (size 0) uses `viewport_size_fallback`. A scroll
    offset past the end of a shrunk list yields an empty window at the end
    with a full-height leading spacer; resetting the scroll position is left
    to the host.
    """
    if not _is_integer(item_count) or item_count < 0:
        raise ItemCountError(f"item_count must be a non-negative integer, got {item_count!r}")
    if not row_height > 0:
        raise VirtualLayoutError(f"row_height must be > 0, got {row_height!r}")
    if not _is_integer(overscan) or overscan < 0:
        raise VirtualLayoutError(f"overscan must be a non-negative integer, got {overscan!r}")

    if item_count == 0:
        return EMPTY_WINDOW

    scroll_offset = max(0, scroll_offset)
    if viewport_size <= 0:
        viewport_size = viewport_size_fallback

    viewport_row_count = math.ceil(viewport_size / row_height)
    first_visible = math.floor(scroll_offset / row_height)

    start_index = min(item_count, max(0, first_visible - overscan))
    end_index = max(start_index, min(item_count, first_visible + viewport_row_count + overscan))

    return VirtualWindow(
        start_index=start_index,
        end_index=end_index,
        leading_spacer_size=start_index * row_height,
        trailing_spacer_size=(item_count - end_index) * row_height,
    )


def compute_layout_window(scroll_offset, viewport_size, item_count, layout: VirtualLayout) -> VirtualWindow:
    return compute_window(
        scroll_offset,
        viewport_size,
        item_count,
        layout.row_height,
        layout.overscan,
        layout.viewport_size_fallback,
    )


def offset_for_index(index: int, row_height: float) -> float:
    """Scroll offset that puts `index` at the top of the viewport."""
    return max(0, index) * row_height
