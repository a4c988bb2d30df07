import struct

import pytest

from shapefusion.docmanager import (
    HISTORY_SIZE,
    PHYSICS,
    SHAPES,
    SOUNDS,
    DocTemplate,
    DocumentManager,
    UnknownFormatError,
    detect_kind,
)


@pytest.fixture
def manager():
    return DocumentManager(
        [DocTemplate("Shapes"), DocTemplate("Sounds"), DocTemplate("Physics")]
    )


def _shapes_bytes(first_offset=-1, first_length=0):
    entries = [struct.pack(">Iiiii12x", 0, first_offset, first_length, -1, 0)]
    entries += [struct.pack(">Iiiii12x", 0, -1, 0, -1, 0)] * 31
    return b"".join(entries)


def _physics_bytes(version=1, data_version=2, directory_offset=200, total=300):
    header = bytearray(128)
    struct.pack_into(">hh", header, 0, version, data_version)
    struct.pack_into(">i", header, 72, directory_offset)
    data = bytes(header) + b"MNpx"
    return data + bytes(total - len(data))


def test_extension_decides_without_reading(tmp_path):
    assert detect_kind(tmp_path / "missing.shpA") == SHAPES
    assert detect_kind(tmp_path / "missing.snd2") == SOUNDS
    assert detect_kind(tmp_path / "missing.txt") is None


def test_sounds_header(tmp_path):
    path = tmp_path / "sounds"
    path.write_bytes(struct.pack(">I", 1) + b"snd2" + bytes(16))
    assert detect_kind(path) == SOUNDS


def test_sounds_bad_version(tmp_path):
    path = tmp_path / "sounds"
    path.write_bytes(struct.pack(">I", 2) + b"snd2" + bytes(16))
    assert detect_kind(path) is None


def test_shapes_header(tmp_path):
    path = tmp_path / "shapes"
    path.write_bytes(_shapes_bytes())
    assert detect_kind(path) == SHAPES


def test_shapes_offset_out_of_file(tmp_path):
    path = tmp_path / "shapes"
    data = _shapes_bytes(first_offset=10_000, first_length=4)
    path.write_bytes(data)
    assert detect_kind(path) is None


def test_shapes_length_past_end(tmp_path):
    path = tmp_path / "shapes"
    path.write_bytes(_shapes_bytes(first_offset=0, first_length=1_000_000))
    assert detect_kind(path) is None


def test_physics_header(tmp_path):
    path = tmp_path / "physics"
    path.write_bytes(_physics_bytes())
    assert detect_kind(path) == PHYSICS


def test_physics_directory_beyond_file(tmp_path):
    path = tmp_path / "physics"
    path.write_bytes(_physics_bytes(directory_offset=300, total=300))
    assert detect_kind(path) is None


def test_physics_unsupported_version(tmp_path):
    path = tmp_path / "physics"
    path.write_bytes(_physics_bytes(version=3))
    assert detect_kind(path) is None


def test_empty_file_is_unknown(tmp_path):
    path = tmp_path / "empty"
    path.write_bytes(b"")
    assert detect_kind(path) is None


def test_find_template(manager):
    assert manager.find_template("Sounds").description == "Sounds"
    assert manager.find_template("Maps") is None


def test_find_template_for_path_needs_registration(tmp_path):
    path = tmp_path / "shapes"
    path.write_bytes(_shapes_bytes())
    empty = DocumentManager()
    assert empty.find_template_for_path(path) is None
    registered = empty.register(DocTemplate("Shapes"))
    assert empty.find_template_for_path(path) is registered


def test_select_document_path_empty(manager):
    assert manager.select_document_path("") is None
    assert manager.last_directory == ""


def test_select_document_path_missing(manager, tmp_path):
    with pytest.raises(FileNotFoundError):
        manager.select_document_path(tmp_path / "absent")


def test_select_document_path_unknown(manager, tmp_path):
    path = tmp_path / "notes"
    path.write_bytes(b"hello")
    with pytest.raises(UnknownFormatError) as info:
        manager.select_document_path(path)
    assert info.value.path == str(path)
    assert manager.last_directory == str(tmp_path)


def test_select_document_path_physics(manager, tmp_path):
    path = tmp_path / "physics"
    path.write_bytes(_physics_bytes())
    assert manager.select_document_path(str(path)).description == "Physics"
    assert manager.last_directory == str(tmp_path)


def test_history_newest_first_without_duplicates(manager):
    manager.add_to_history("a")
    manager.add_to_history("b")
    manager.add_to_history("a")
    assert manager.history == ("a", "b")
    assert manager.history_file(0) == "a"
    assert manager.history_file(2) is None
    assert manager.history_file(-1) is None


def test_history_is_bounded(manager):
    names = [f"file{i}" for i in range(HISTORY_SIZE + 3)]
    for name in names:
        manager.add_to_history(name)
    assert len(manager.history) == HISTORY_SIZE
    assert manager.history[0] == names[-1]
    assert names[0] not in manager.history