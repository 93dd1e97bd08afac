import inspect
import logging
import weakref
from typing import Callable

from PySide6.QtCore import QEvent, QObject

from plotview.widgets.virtual_window import (VirtualLayout, VirtualWindow,
                                             compute_layout_window)

logger = logging.getLogger(__name__)

# Viewport events that can change the visible band.
_VIEWPORT_EVENTS = (QEvent.Type.Resize, QEvent.Type.Show)


def _callback_ref(callback):
    """Hold bound methods weakly so a host and its tracker never form a cycle."""
    if inspect.ismethod(callback):
        return weakref.WeakMethod(callback)
    return lambda: callback


class VirtualWindowTracker(QObject):
    """Follows a scroll area and reports the render window when it changes.

    The tracker reads the scroll offset and viewport height on attach and on
    every scroll/resize signal, computes the window, and calls `on_window`
    only when the window differs from the last one it reported. It keeps no
    other state, so each recompute depends only on the current inputs.

    Pass the host widget as `parent`: Qt then deletes the tracker with the
    host, which drops its connections and its viewport event filter.
    """

    def __init__(
        self,
        scroll_area,
        layout: VirtualLayout,
        item_count: Callable[[], int],
        on_window: Callable[[VirtualWindow], None],
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        # Only the scroll bar and viewport are kept; holding the scroll area
        # itself would tie its lifetime to the host's Python wrapper.
        self._scroll_bar = scroll_area.verticalScrollBar()
        self._viewport = scroll_area.viewport()
        self._layout = layout
        self._item_count = _callback_ref(item_count)
        self._on_window = _callback_ref(on_window)
        self._last_window: VirtualWindow | None = None
        self._attached = False
        self.origin = 0

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def layout(self) -> VirtualLayout:
        return self._layout

    @property
    def last_window(self) -> VirtualWindow | None:
        return self._last_window

    def set_layout(self, layout: VirtualLayout):
        """Swap the row geometry; the next refresh always reports."""
        self._layout = layout
        self._last_window = None

    def attach(self) -> VirtualWindow | None:
        if not self._attached and self._viewport is not None:
            self._scroll_bar.valueChanged.connect(self._on_scroll_value_changed)
            self._scroll_bar.rangeChanged.connect(self._on_scroll_range_changed)
            self._viewport.installEventFilter(self)
            self._viewport.destroyed.connect(self._on_host_destroyed)
            self._attached = True
        return self.refresh(force=True)

    def detach(self):
        if not self._attached:
            return
        self._attached = False
        try:
            self._scroll_bar.valueChanged.disconnect(self._on_scroll_value_changed)
            self._scroll_bar.rangeChanged.disconnect(self._on_scroll_range_changed)
            self._viewport.removeEventFilter(self)
            self._viewport.destroyed.disconnect(self._on_host_destroyed)
        except RuntimeError as e:
            # Host already deleted on the C++ side; its connections went with it.
            logger.debug("[VIRTUAL] Detach after host teardown: %s", e)
        self._last_window = None

    def __enter__(self):
        self.attach()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.detach()
        return False

    def scroll_offset(self) -> int:
        return self._scroll_bar.value() - self.origin

    def viewport_size(self) -> int:
        return self._viewport.height()

    def compute(self) -> VirtualWindow:
        item_count = self._item_count()
        return compute_layout_window(
            self.scroll_offset(), self.viewport_size(),
            item_count() if item_count is not None else 0, self._layout)

    def refresh(self, force: bool = False) -> VirtualWindow | None:
        """Recompute the window and report it if it changed.

        Returns the current window, or None when detached or the host is gone.
        """
        if not self._attached:
            return None
        on_window = self._on_window()
        if on_window is None:
            return None
        window = self.compute()
        if force or window != self._last_window:
            self._last_window = window
            logger.debug(
                "[VIRTUAL] Window %d..%d (lead=%s trail=%s)",
                window.start_index, window.end_index,
                window.leading_spacer_size, window.trailing_spacer_size)
            on_window(window)
        return window

    def eventFilter(self, watched, event):
        if self._attached and watched is self._viewport and event.type() in _VIEWPORT_EVENTS:
            self.refresh()
        return super().eventFilter(watched, event)

    def _on_scroll_value_changed(self, value):
        self.refresh()

    def _on_scroll_range_changed(self, minimum, maximum):
        self.refresh()

    def _on_host_destroyed(self, *args):
        self._attached = False
        self._scroll_bar = None
        self._viewport = None
        self._last_window = None
