"""Model of a scrollable grid of selectable frame thumbnails."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator

from shapefusion.bitmapbrowser import ThumbnailGrid


@dataclass(frozen=True)
class FrameImage:
    """The bitmap a frame shows, together with the frame's mirror flags."""

    bitmap: Any
    x_mirrored: bool
    y_mirrored: bool


@dataclass(frozen=True)
class BadThumbnail:
    """Placeholder thumbnail for a frame whose bitmap is missing."""

    size: int


BadThumbnailFactory = Callable[[int], Any]


class FrameBrowser(ThumbnailGrid):
    """A grid of thumbnails of frames.

    Frames need ``bitmap_index``, ``x_mirrored`` and ``y_mirrored``
    attributes; bitmaps need ``width``, ``height`` and ``pixels``. Add the
    bitmaps and set the color table before adding frames. The renderer is
    handed a ``FrameImage`` for frames with a valid bitmap; frames without
    one get the thumbnail made by ``bad_thumbnail``.
    """

    def __init__(
        self,
        width=0,
        height=0,
        renderer=None,
        on_select=None,
        on_delete=None,
        bad_thumbnail: BadThumbnailFactory | None = None,
    ) -> None:
        super().__init__(width, height, renderer, on_select, on_delete)
        self.frames: list[Any] = []
        self.bitmaps: list[Any] = []
        self._bad_thumbnail = bad_thumbnail or BadThumbnail

    @property
    def _count(self) -> int:
        return len(self.frames)

    def _frame_bitmap(self, frame) -> Any | None:
        index = frame.bitmap_index
        if 0 <= index < len(self.bitmaps):
            return self.bitmaps[index]
        return None

    def _create_thumbnail(self, index: int) -> Any:
        frame = self.frames[index]
        bitmap = self._frame_bitmap(frame)
        if bitmap is None:
            return self._bad_thumbnail(self.thumbnail_size)
        image = FrameImage(bitmap, bool(frame.x_mirrored), bool(frame.y_mirrored))
        return self._renderer(image, self.color_table, self.white_transparency, self.thumbnail_size)

    def _item_dimensions(self) -> Iterator[tuple[int, int]]:
        for frame in self.frames:
            bitmap = self._frame_bitmap(frame)
            if bitmap is not None:
                yield bitmap.width, bitmap.height

    def add_bitmap(self, bitmap) -> None:
        """Register a bitmap frames may refer to; call before adding frames.

        None is ignored; a bitmap without pixels raises ValueError.
        """
        if bitmap is None:
            return
        if bitmap.pixels is None:
            raise ValueError("bitmap has no pixels")
        self.bitmaps.append(bitmap)

    def add_frame(self, frame) -> None:
        """Append a frame to the grid; None is ignored."""
        if frame is None:
            return
        self.frames.append(frame)
        self.thumbnails.append(self._create_thumbnail(len(self.frames) - 1))
        if not self.is_frozen:
            self._update_virtual_size()

    def clear(self) -> None:
        """Remove all frames, bitmaps and thumbnails."""
        self.thumbnails.clear()
        self.frames.clear()
        self.bitmaps.clear()
        self.positions.clear()
        self.selection = -1
        if not self.is_frozen:
            self._update_virtual_size()

    def clear_bitmaps(self) -> None:
        """Forget the bitmaps while keeping the frames."""
        self.bitmaps.clear()