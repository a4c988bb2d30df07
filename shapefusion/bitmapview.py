"""Model of a pannable view showing one full-size bitmap."""

from __future__ import annotations

from typing import Any, Callable

Decoder = Callable[[Any, Any, bool], Any]


class BitmapView:
    """Shows a single bitmap centred in a scrollable area.

    The bitmap needs ``width``, ``height`` and ``pixels`` attributes. The
    decoder turns a bitmap, a color table and the transparency flag into a
    displayable image.
    """

    def __init__(self, width=0, height=0, decoder: Decoder | None = None) -> None:
        self.client_size = (width, height)
        self.virtual_size = (0, 0)
        self.scroll_position = (0, 0)
        self.bitmap = None
        self.color_table = None
        self.white_transparency = True
        self.decoded = None
        self.dragging = False
        self._drag_start = (0, 0)
        self._decoder = decoder

    def _fit_virtual_size(self) -> None:
        bw, bh = (0, 0) if self.bitmap is None else (self.bitmap.width, self.bitmap.height)
        cw, ch = self.client_size
        self.virtual_size = (max(bw, cw), max(bh, ch))
        self._clamp_scroll()

    def _clamp_scroll(self) -> None:
        x, y = self.scroll_position
        vw, vh = self.virtual_size
        cw, ch = self.client_size
        self.scroll_position = (
            max(0, min(x, vw - cw)),
            max(0, min(y, vh - ch)),
        )

    def _decode(self) -> None:
        if (
            self.bitmap is not None
            and self.bitmap.pixels is not None
            and self.color_table is not None
            and self._decoder is not None
        ):
            self.decoded = self._decoder(self.bitmap, self.color_table, self.white_transparency)

    def resize(self, width, height) -> None:
        self.client_size = (width, height)
        self._fit_virtual_size()

    def set_bitmap(self, bitmap) -> None:
        """Show a bitmap; set the color table first. Raises ValueError without pixels."""
        self.bitmap = bitmap
        if bitmap is None:
            self.virtual_size = (0, 0)
            self._clamp_scroll()
            return
        if bitmap.pixels is None:
            self.virtual_size = (0, 0)
            self._clamp_scroll()
            raise ValueError("bitmap has no pixels")
        self._fit_virtual_size()
        self._decode()

    def set_color_table(self, color_table) -> None:
        self.color_table = color_table
        self._decode()

    def set_transparent_pixels_display(self, show) -> None:
        self.white_transparency = bool(show)
        self._decode()

    def press(self, x, y) -> None:
        """Start panning at a window position."""
        sx, sy = self.scroll_position
        self.dragging = True
        self._drag_start = (x + sx, y + sy)

    def drag(self, x, y) -> None:
        """Pan while the button is held."""
        if not self.dragging:
            return
        start_x, start_y = self._drag_start
        self.scroll_position = (start_x - x, start_y - y)
        self._clamp_scroll()

    def release(self) -> None:
        self.dragging = False

    def image_origin(self, image_width, image_height) -> tuple[int, int]:
        """Where an image of the given size is drawn to sit centred."""
        vw, vh = self.virtual_size
        return vw // 2 - image_width // 2, vh // 2 - image_height // 2