"""Models of the color table list and of the single color table view."""

from __future__ import annotations

from typing import Any, Callable

from shapefusion.bitmapbrowser import Key

Listener = Callable[[int], None]

BROWSER_MARGIN = 10
BROWSER_SAMPLE_HEIGHT = 20
VIEW_MARGIN = 7


def display_color(color) -> tuple[int, int, int]:
    """The 8-bit RGB triple used to draw a 16-bit color table entry."""
    return color.red >> 8, color.green >> 8, color.blue >> 8


def _contains(left: int, top: int, width: int, height: int, x: int, y: int) -> bool:
    return left <= x < left + width and top <= y < top + height


class CTBrowser:
    """A vertical list of color tables, each drawn as a strip of color samples.

    Sample width adapts to the window width while the sample height is
    fixed. Color tables need a ``colors`` sequence whose entries carry
    ``red``, ``green``, ``blue`` (16-bit) and ``luminescent`` attributes.
    Selection changes are reported to ``on_select`` with the new index.
    """

    def __init__(self, width=0, height=0, on_select: Listener | None = None) -> None:
        self.client_size = (width, height)
        self.virtual_size = (0, 0)
        self.color_tables: list[Any] = []
        self.colors_per_table = 0
        self.sample_width = 1
        self.sample_height = BROWSER_SAMPLE_HEIGHT
        self.margin = BROWSER_MARGIN
        self.selection = -1
        self._on_select = on_select

    def _select(self, index: int) -> None:
        self.selection = index
        if self._on_select is not None:
            self._on_select(index)

    def _update_virtual_size(self) -> None:
        width, _ = self.client_size
        margin, per_table = self.margin, self.colors_per_table
        for w in range(1, self.sample_height):
            if 2 * margin + w * per_table > width:
                self.sample_width = w - 1
                break
        if self.sample_width < 1:
            self.sample_width = 1
        self.virtual_size = (
            2 * margin + self.sample_width * per_table,
            margin + len(self.color_tables) * (self.sample_height + margin),
        )

    def add_color_table(self, color_table) -> None:
        """Append a color table; None is ignored."""
        if color_table is None:
            return
        self.colors_per_table = len(color_table.colors)
        self.color_tables.append(color_table)
        self._update_virtual_size()

    def clear(self) -> None:
        self.color_tables.clear()
        self.selection = -1
        self.colors_per_table = 0
        self._update_virtual_size()

    def resize(self, width, height) -> None:
        self.client_size = (width, height)
        self._update_virtual_size()

    def click(self, x, y) -> int:
        """Select the color table under a point in list coordinates."""
        margin, sample_h = self.margin, self.sample_height
        strip_width = self.sample_width * self.colors_per_table
        new_selection = next(
            (
                index
                for index in range(len(self.color_tables))
                if _contains(margin, margin + index * (sample_h + margin), strip_width, sample_h, x, y)
            ),
            -1,
        )
        if new_selection != self.selection:
            self._select(new_selection)
        return self.selection

    def key_down(self, key) -> bool:
        """Move the selection with the up and down keys; False for other keys."""
        count = len(self.color_tables)
        handled = key in (Key.UP, Key.DOWN)
        new_selection = self.selection
        if 0 <= self.selection < count:
            if key is Key.UP and self.selection > 0:
                new_selection -= 1
            elif key is Key.DOWN and self.selection < count - 1:
                new_selection += 1
        elif count > 0 and handled:
            new_selection = 0
        if new_selection != self.selection:
            self._select(new_selection)
        return handled


class CTView:
    """Shows the colors of one color table as swatches that wrap to fit.

    Selection changes are reported to ``on_selection`` with the number of
    selected swatches, and color edits to ``on_color`` with the index of
    the edited color.
    """

    def __init__(
        self,
        width=0,
        height=0,
        on_selection: Listener | None = None,
        on_color: Listener | None = None,
    ) -> None:
        self.client_size = (width, height)
        self.color_table = None
        self.swatch_size = 0
        self.margin = VIEW_MARGIN
        self._selection_mask: list[bool] = []
        self._on_selection = on_selection
        self._on_color = on_color

    @property
    def _count(self) -> int:
        return 0 if self.color_table is None else len(self.color_table.colors)

    @property
    def selection(self) -> list[bool]:
        """One flag per color, true where the swatch is selected."""
        return list(self._selection_mask)

    def set_color_table(self, color_table) -> None:
        need_recalc = (
            color_table is not None
            and self.color_table is not None
            and len(color_table.colors) != len(self.color_table.colors)
        )
        self.color_table = color_table
        self._selection_mask = [False] * self._count
        if need_recalc:
            self._calculate_swatch_size()

    def resize(self, width, height) -> None:
        self.client_size = (width, height)
        self._calculate_swatch_size()

    def _calculate_swatch_size(self) -> None:
        count = self._count
        if count == 0:
            self.swatch_size = 0
            return
        width, height = self.client_size
        margin = self.margin
        candidate = 2
        self.swatch_size = 0
        while self.swatch_size == 0:
            x = y = margin
            for _ in range(count):
                x += candidate + margin
                if x + candidate + margin >= width:
                    x = margin
                    y += candidate + margin
                    if y + candidate + margin >= height:
                        self.swatch_size = candidate - 1
                        break
            candidate += 1

    def swatch_positions(self) -> list[tuple[int, int]]:
        """Top-left corners of the swatches, in color order."""
        width, _ = self.client_size
        margin, size = self.margin, self.swatch_size
        positions = []
        x = y = margin
        for _ in range(self._count):
            positions.append((x, y))
            x += size + margin
            if x + size + margin >= width:
                x = margin
                y += size + margin
        return positions

    def swatch_at(self, x, y) -> int | None:
        """Index of the swatch containing a point, or None."""
        size = self.swatch_size
        return next(
            (
                index
                for index, (sx, sy) in enumerate(self.swatch_positions())
                if _contains(sx, sy, size, size, x, y)
            ),
            None,
        )

    def click(self, x, y, extend=False) -> int:
        """Select the swatch under a point; extend keeps the current selection.

        Returns the number of selected swatches.
        """
        if not extend:
            self._selection_mask = [False] * self._count
        index = self.swatch_at(x, y)
        if index is not None:
            self._selection_mask[index] = True
        selected = sum(self._selection_mask)
        if self._on_selection is not None:
            self._on_selection(selected)
        return selected

    def set_swatch_color(self, x, y, red, green, blue) -> int | None:
        """Give the swatch under a point a new 8-bit RGB color.

        Returns the index of the edited color, or None when no swatch is there.
        """
        for component in (red, green, blue):
            if not 0 <= component <= 255:
                raise ValueError(f"color component {component} out of range 0..255")
        index = self.swatch_at(x, y)
        if index is None:
            return None
        color = self.color_table.colors[index]
        color.red = red << 8
        color.green = green << 8
        color.blue = blue << 8
        if self._on_color is not None:
            self._on_color(index)
        return index