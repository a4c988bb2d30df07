"""Model of a scrollable grid of selectable bitmap thumbnails."""

from __future__ import annotations

import abc
import enum
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator

DEFAULT_THUMBNAIL_SIZE = 64
MARGIN = 7
SCROLL_RATE = (0, 2)
MIN_AUTO_DIMENSION = 10

Renderer = Callable[[Any, Any, bool, int], Any]
Listener = Callable[[int], None]


class Key(enum.Enum):
    """Keys the thumbnail grids respond to."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    DELETE = "delete"


@dataclass(frozen=True)
class Thumbnail:
    """What the default renderer produces: the inputs a thumbnail is drawn from."""

    source: Any
    color_table: Any
    white_transparency: bool
    size: int


def default_renderer(source, color_table, white_transparency, size) -> Thumbnail:
    return Thumbnail(source, color_table, white_transparency, size)


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class ThumbnailGrid(abc.ABC):
    """Lays out thumbnails in rows that fill the window width.

    Selection changes are reported to ``on_select`` and delete requests to
    ``on_delete``, each with the index concerned.
    """

    def __init__(
        self,
        width=0,
        height=0,
        renderer: Renderer | None = None,
        on_select: Listener | None = None,
        on_delete: Listener | None = None,
    ) -> None:
        self.client_size = (width, height)
        self.virtual_size = (0, 0)
        self.scroll_rate = SCROLL_RATE
        self.thumbnail_size = DEFAULT_THUMBNAIL_SIZE
        self.margin = MARGIN
        self.auto_size = False
        self.white_transparency = True
        self.color_table = None
        self.selection = -1
        self.num_cols = 0
        self.num_rows = 0
        self.thumbnails: list[Any] = []
        self.positions: list[tuple[int, int]] = []
        self._frozen_count = 0
        self._renderer = renderer or default_renderer
        self._on_select = on_select
        self._on_delete = on_delete

    # Hooks for the concrete browsers.

    @property
    @abc.abstractmethod
    def _count(self) -> int:
        """Number of items shown."""

    @abc.abstractmethod
    def _create_thumbnail(self, index: int) -> Any:
        """Render the thumbnail of the item at index."""

    @abc.abstractmethod
    def _item_dimensions(self) -> Iterator[tuple[int, int]]:
        """Sizes of the images shown, used to pick the best-fit size."""

    # Freezing.

    @property
    def is_frozen(self) -> bool:
        return self._frozen_count > 0

    def freeze(self) -> None:
        """Defer layout and rendering until the matching thaw."""
        self._frozen_count += 1

    def thaw(self) -> None:
        if self._frozen_count > 0:
            self._frozen_count -= 1
            if self._frozen_count == 0:
                self._update_virtual_size()

    @contextmanager
    def frozen(self) -> Iterator[ThumbnailGrid]:
        self.freeze()
        try:
            yield self
        finally:
            self.thaw()

    # Settings.

    def resize(self, width, height) -> None:
        self.client_size = (width, height)
        self._update_virtual_size()

    def set_thumbnail_size(self, size) -> None:
        """Set the thumbnail size in pixels; a size of 0 or less means best fit."""
        if size > 0:
            self.thumbnail_size = int(size)
            self.auto_size = False
        else:
            self.auto_size = True
        if not self.is_frozen:
            self._update_virtual_size()
            if not self.auto_size:
                self.rebuild_thumbnails()

    def set_transparent_pixels_display(self, show) -> None:
        self.white_transparency = bool(show)
        if not self.is_frozen:
            self.rebuild_thumbnails()

    def set_color_table(self, color_table) -> None:
        """Choose the palette; call before adding items."""
        self.color_table = color_table
        if not self.is_frozen:
            self.rebuild_thumbnails()

    # Input.

    def _select(self, index: int) -> None:
        self.selection = index
        if self._on_select is not None:
            self._on_select(index)

    def click(self, x, y) -> int:
        """Select the thumbnail under a point in grid coordinates."""
        size = self.thumbnail_size
        new_selection = next(
            (
                index
                for index, (px, py) in enumerate(self.positions)
                if px <= x < px + size and py <= y < py + size
            ),
            -1,
        )
        if new_selection != self.selection:
            self._select(new_selection)
        return self.selection

    def key_down(self, key) -> bool:
        """Handle a key press; return False for keys the grid ignores."""
        if not isinstance(key, Key):
            return False
        count = self._count
        has_selection = 0 <= self.selection < count

        if key is Key.DELETE:
            if has_selection and self._on_delete is not None:
                self._on_delete(self.selection)
            return True

        new_selection = self.selection
        if has_selection:
            cols = self.num_cols
            if cols > 0:
                column, row = self.selection % cols, self.selection // cols
                if key is Key.LEFT and column > 0:
                    new_selection -= 1
                elif key is Key.RIGHT and column < cols - 1:
                    new_selection += 1
                elif key is Key.UP and row > 0:
                    new_selection -= cols
                elif key is Key.DOWN and row < self.num_rows - 1:
                    new_selection += cols
        elif count > 0:
            new_selection = 0

        if new_selection != self.selection and 0 <= new_selection < count:
            self._select(new_selection)
        return True

    # Rendering and layout.

    def rebuild_thumbnail(self, index) -> None:
        if 0 <= index < min(self._count, len(self.thumbnails)):
            self.thumbnails[index] = self._create_thumbnail(index)

    def rebuild_thumbnails(self) -> None:
        """Re-render every thumbnail without touching the layout."""
        self.thumbnails = [self._create_thumbnail(index) for index in range(self._count)]

    def _best_fit_size(self, count: int, width: int, height: int) -> int:
        margin = self.margin
        max_dimension = MIN_AUTO_DIMENSION
        for w, h in self._item_dimensions():
            max_dimension = max(max_dimension, w, h)
        size = margin
        while True:
            cols = _cdiv(width - margin, size + margin)
            rows = count // cols if cols > 0 else count
            if rows * cols < count:
                rows += 1
            total_height = rows * (size + margin) + margin
            if total_height > height or size + 2 * margin > width:
                return size - 1
            if size >= max_dimension:
                # Larger thumbnails would only pad small images.
                return max_dimension
            size += 1

    def _update_virtual_size(self) -> None:
        count = self._count
        width, height = self.client_size
        if count < 1:
            self.virtual_size = (0, 0)
            return

        if self.auto_size:
            self.scroll_rate = (0, 0)
            size = self._best_fit_size(count, width, height)
            if size != self.thumbnail_size:
                self.thumbnail_size = size
                self.rebuild_thumbnails()
        else:
            self.scroll_rate = SCROLL_RATE

        margin, size = self.margin, self.thumbnail_size
        step = size + margin
        self.num_cols = _cdiv(width - margin, step)
        self.num_rows = count // self.num_cols if self.num_cols > 0 else count
        if self.num_rows * self.num_cols < count:
            self.num_rows += 1
        self.virtual_size = (width, self.num_rows * step + margin)

        positions = []
        x = y = margin
        for _ in range(count):
            positions.append((x, y))
            x += step
            if x + step > width:
                x = margin
                y += step
        self.positions = positions


class BitmapBrowser(ThumbnailGrid):
    """A grid of thumbnails of bitmaps.

    Bitmaps need ``width``, ``height`` and ``pixels`` attributes.
    """

    def __init__(self, width=0, height=0, renderer=None, on_select=None, on_delete=None) -> None:
        super().__init__(width, height, renderer, on_select, on_delete)
        self.bitmaps: list[Any] = []

    @property
    def _count(self) -> int:
        return len(self.bitmaps)

    def _create_thumbnail(self, index: int) -> Any:
        return self._renderer(
            self.bitmaps[index], self.color_table, self.white_transparency, self.thumbnail_size
        )

    def _item_dimensions(self) -> Iterator[tuple[int, int]]:
        return ((bitmap.width, bitmap.height) for bitmap in self.bitmaps)

    def add_bitmap(self, bitmap) -> None:
        """Append a bitmap; None is ignored, a bitmap without pixels raises ValueError."""
        if bitmap is None:
            return
        if bitmap.pixels is None:
            raise ValueError("bitmap has no pixels")
        self.bitmaps.append(bitmap)
        self.thumbnails.append(self._create_thumbnail(len(self.bitmaps) - 1))
        if not self.is_frozen:
            self._update_virtual_size()

    def clear(self) -> None:
        self.thumbnails.clear()
        self.bitmaps.clear()
        self.positions.clear()
        self.selection = -1
        self._update_virtual_size()