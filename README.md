# shapefusion

Building blocks for an editor of Marathon 2, Marathon Infinity and Aleph One
data files: shapes, sounds and physics.

The package recognises which kind of data file a path holds, manages document
templates and a recent-file history, and models the layout and selection
behaviour of the editor's browsers: thumbnail grids of bitmaps and frames, a
single pannable bitmap view, a list of color tables and a swatch view of one
color table. None of these models draws anything. They compute sizes,
positions and selections, and hand rendering to callables you supply.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Recognising files

```python
from shapefusion.docmanager import DocTemplate, DocumentManager, detect_kind

detect_kind("Shapes.shpA")   # "Shapes": a known extension is trusted
detect_kind("some/file")     # reads the header: "Sounds", "Shapes", "Physics" or None

manager = DocumentManager([DocTemplate("Shapes"), DocTemplate("Sounds"), DocTemplate("Physics")])
template = manager.find_template_for_path("Shapes.shpA")
```

The extensions `sndA`, `snd2`, `shpA` and `shp2` decide the kind without
opening the file. Otherwise the header is checked for a sounds file, then for
a shapes collection table, then for a physics file.

`DocumentManager.select_document_path` returns `None` when given an empty
path, raises `FileNotFoundError` for a missing file and `UnknownFormatError`
for a file of no recognised kind, and remembers the file's directory in
`last_directory`. `add_to_history` keeps up to nine recent files, newest
first, and `history_file(index)` returns one of them or `None`.

## Thumbnail grids

`BitmapBrowser` (in `shapefusion.bitmapbrowser`) and `FrameBrowser` (in
`shapefusion.framebrowser`) lay thumbnails out in rows that fill the widget
width. Bitmaps need `width`, `height` and `pixels` attributes; frames need
`bitmap_index`, `x_mirrored` and `y_mirrored`.

```python
from types import SimpleNamespace
from shapefusion.bitmapbrowser import BitmapBrowser, Key

browser = BitmapBrowser(200, 300, on_select=print)
browser.add_bitmap(SimpleNamespace(width=32, height=32, pixels=b"\0" * 1024))
browser.positions        # [(7, 7)]
browser.click(10, 10)    # selects thumbnail 0
browser.key_down(Key.RIGHT)
```

`set_thumbnail_size` takes a size in pixels, or 0 or less for best fit.
`freeze` and `thaw`, or the `frozen()` context manager, defer layout while
many items are added. `Key.DELETE` reports the selected index to
`on_delete`. Add bitmaps to a `FrameBrowser` before its frames; frames whose
bitmap index is out of range get a placeholder thumbnail.

## Bitmap view

`BitmapView` (in `shapefusion.bitmapview`) holds one full-size bitmap, keeps
its virtual size at least as large as the window, pans with `press`, `drag`
and `release`, and gives with `image_origin` the point where an image is drawn
to sit centred.

## Color tables

`CTBrowser` and `CTView` (in `shapefusion.colortables`) work on color tables
with a `colors` sequence whose entries carry 16-bit `red`, `green`, `blue`
and a `luminescent` flag. `CTBrowser` lists tables as strips of samples and
moves its selection with clicks and `Key.UP` / `Key.DOWN`. `CTView` fits
swatches into the window, selects them with `click` (pass `extend=True` to
add to the selection) and recolors one with `set_swatch_color`, which takes
8-bit components.

## What the package does not do

It has no command to start, no windows and no menus: it provides the logic
such an editor is built on, not the editor itself. It does not read or write
the contents of shapes, sounds or physics files beyond the header checks used
to recognise them.