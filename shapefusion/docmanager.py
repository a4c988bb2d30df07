"""Document templates and detection of the kind of file being opened."""

from __future__ import annotations

import errno
import os
import struct
from dataclasses import dataclass

SOUNDS = "Sounds"
SHAPES = "Shapes"
PHYSICS = "Physics"

HISTORY_SIZE = 9

_EXTENSION_KINDS = {
    "sndA": SOUNDS,
    "snd2": SOUNDS,
    "shpA": SHAPES,
    "shp2": SHAPES,
}

_SHAPES_ENTRY = struct.Struct(">Iiiii12x")
_SHAPES_COLLECTIONS = 32
_SHAPES_HEADER_SIZE = _SHAPES_ENTRY.size * _SHAPES_COLLECTIONS
_PHYSICS_HEADER_SIZE = 128


@dataclass(frozen=True)
class DocTemplate:
    """Associates a kind of document with its description."""

    description: str
    file_filter: str = "*"
    doc_type_name: str = ""
    view_type_name: str = ""


class UnknownFormatError(Exception):
    """Raised when a file is not of any recognised kind."""

    def __init__(self, path) -> None:
        super().__init__(f"Sorry, the format for this file is unknown: {path}")
        self.path = path


def _extension(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[1][1:]


def _is_sounds(head: bytes) -> bool:
    if len(head) < 8:
        return False
    (version,) = struct.unpack_from(">I", head)
    return version in (0, 1) and head[4:8] == b"snd2"


def _is_shapes(head: bytes, size: int) -> bool:
    if len(head) < _SHAPES_HEADER_SIZE:
        return False

    def out_of_bounds(offset: int, length: int) -> bool:
        return offset != -1 and (offset >= size or offset + length > size)

    for status, offset, length, offset16, length16 in _SHAPES_ENTRY.iter_unpack(
        head[:_SHAPES_HEADER_SIZE]
    ):
        if status != 0 or out_of_bounds(offset, length) or out_of_bounds(offset16, length16):
            return False
    return True


def _is_physics(head: bytes, size: int) -> bool:
    if len(head) < _PHYSICS_HEADER_SIZE + 4:
        return False
    version, data_version = struct.unpack_from(">hh", head)
    if version not in (0, 1, 2, 4) or data_version not in (0, 1, 2):
        return False
    (directory_offset,) = struct.unpack_from(">i", head, 72)
    if directory_offset >= size:
        return False
    return head[_PHYSICS_HEADER_SIZE:_PHYSICS_HEADER_SIZE + 4] == b"MNpx"


def detect_kind(path) -> str | None:
    """Return "Sounds", "Shapes" or "Physics" for a file, or None if unknown.

    A recognised extension is trusted without reading the file.
    """
    path = os.fspath(path)
    kind = _EXTENSION_KINDS.get(_extension(path))
    if kind is not None:
        return kind

    try:
        with open(path, "rb") as stream:
            size = os.fstat(stream.fileno()).st_size
            head = stream.read(_SHAPES_HEADER_SIZE)
    except OSError:
        return None

    if _is_sounds(head):
        return SOUNDS
    if _is_shapes(head, size):
        return SHAPES
    if _is_physics(head, size):
        return PHYSICS
    return None


class DocumentManager:
    """Holds document templates, the recent-file history and the last directory."""

    def __init__(self, templates=()) -> None:
        self.templates: list[DocTemplate] = list(templates)
        self.last_directory = ""
        self._history: list[str] = []

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    def register(self, template: DocTemplate) -> DocTemplate:
        self.templates.append(template)
        return template

    def find_template(self, description) -> DocTemplate | None:
        return next((t for t in self.templates if t.description == description), None)

    def find_template_for_path(self, path) -> DocTemplate | None:
        kind = detect_kind(path)
        return None if kind is None else self.find_template(kind)

    def select_document_path(self, path) -> DocTemplate | None:
        """Choose the template for a file the user picked.

        Returns None when no file was picked. Raises FileNotFoundError for a
        missing file and UnknownFormatError for an unrecognised one.
        """
        path = "" if path is None else os.fspath(path)
        if not path:
            return None
        if not os.path.isfile(path):
            raise FileNotFoundError(errno.ENOENT, "Sorry, could not open this file.", path)
        self.last_directory = os.path.dirname(path)
        template = self.find_template_for_path(path)
        if template is None:
            raise UnknownFormatError(path)
        return template

    def add_to_history(self, path) -> None:
        path = os.fspath(path)
        if path in self._history:
            self._history.remove(path)
        self._history.insert(0, path)
        del self._history[HISTORY_SIZE:]

    def history_file(self, index) -> str | None:
        """Return the recent file at index (0 is the newest), or None."""
        if 0 <= index < len(self._history):
            return self._history[index]
        return None