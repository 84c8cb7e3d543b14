# vgengine

The core pieces of a small software-rendered engine. Each module works on its own and needs only the standard library.

- `vgengine.profiling` holds named `Profiler` records. Each one stores the last cycle and time difference, the minimum, maximum and total, and a count. `avg_cycles()` and `avg_time()` give the averages. A `ProfilerRegistry` holds up to `capacity` profilers (100 by default) and keeps a stack of the ones currently open. It raises `ProfilerError` in these cases:
  - registering more profilers than it has room for,
  - pushing an index that is not registered,
  - popping an empty stack.

  You can pass it your own cycle and time clocks.
- `vgengine.jobs` provides `JobQueue`, a ring buffer of `capacity` slots (256 by default) that holds at most `capacity - 1` waiting jobs. Worker threads drain it.
  - `submit` blocks while the ring is full.
  - `wait_for_all` blocks until every job has finished, then re-raises the first exception a job raised.
  - `thread_index()` gives a worker's index, or -1 on any other thread.
  - `close()`, or leaving a `with` block, lets the workers finish the queued jobs and then joins them.
- `vgengine.paths` provides `ProjectPaths.from_root(root)`, which lays out a project under `root`:
  - `data/` with `data/logs/`, `data/assets/`, `data/assets/meshes/` and `data/assets/fonts/`,
  - `code/` with its `core`, `graphics`, `math` and `platform` subfolders,
  - `exe/`, holding `main.dll` and `main_copy.dll`.

  `font_atlas_path()` and `font_data_path()` give `<name><size>.bmp` and `<name><size>.font` in the fonts folder, with `Consolas` and `8` as the defaults.
- `vgengine.platform` has file and directory helpers:
  - `get_file_size`, `read_entire_file`, `write_entire_file` and `write_entire_existing_file`,
  - `copy_file` and `copy_and_maybe_overwrite_file`,
  - `move_file` and `move_and_maybe_overwrite_file`,
  - `delete_file`, `create_directory`, `delete_directory` and `directory_exists`.

  It also has a millisecond clock (`read_time_counter`), a nanosecond tick counter (`read_cycle_counter`), and `get_time()`, which returns a UTC `Time`.
- `vgengine.fontatlas` covers monospaced glyph atlas files:
  - `atlas_layout` places padded glyph cells in a square grid, and `AtlasLayout.glyph_origin` gives each cell's position.
  - `bmp_headers` and `write_atlas_bmp` write top-down 32-bit BMP files.
  - `FontMetrics` is the 5-byte `.font` record: the padding as one byte, then the glyph width and height as little-endian u16. `write_font_metadata` and `read_font_metadata` save and load it.
- `vgengine.frame` holds per-frame data:
  - `Key`, `MouseButton` and `map_virtual_key`, which maps a virtual-key code to a `Key`.
  - `KeyState`, which tracks held keys and buttons and their pressed and released edges for the frame. `end_frame()` clears the edges.
  - `FramePass`, `FrameResult` and `default_frame_result()`.
  - `display_mode(result)`, which returns a `DisplayMode` or None.
  - `sleep_time_ms`, for frame-rate capping.
  - `camera_movement`, the camera-local movement requested by W/S/A/D/Q/E.

## Install

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Error handling in `vgengine.platform`

The file helpers return False, or None, for the expected failures:
- a missing file,
- a directory that already exists,
- a directory that is not empty.

`copy_file` and `move_file` raise `FileExistsError` when the destination exists. `read_entire_file(path, size)` raises `OSError` when the file holds fewer than `size` bytes.

`write_entire_file` and `write_entire_existing_file` write from the start of the file and do not truncate it. Bytes past the end of the new data stay in the file.

## Examples

Profiling:

```python
from vgengine.platform import read_cycle_counter, read_time_counter
from vgengine.profiling import ProfilerRegistry

profilers = ProfilerRegistry(100, read_cycle_counter, read_time_counter)
with profilers.profile("model_matrix_test"):
    ...
index = profilers.register("model_matrix_test")
print(profilers[index].count, profilers[index].avg_time())
```

Jobs:

```python
from vgengine.jobs import JobQueue

results = []
with JobQueue(256) as queue:
    queue.start_workers(3)
    for n in range(10):
        queue.submit(results.append, n)
    queue.wait_for_all()
```

Font atlas files:

```python
from vgengine.fontatlas import (
    FontMetrics, atlas_layout, write_atlas_bmp, write_font_metadata, read_font_metadata,
)

layout = atlas_layout(glyph_width=7, glyph_height=12)
write_atlas_bmp("Consolas8.bmp", layout.width, layout.height,
                bytes(layout.width * layout.height * 4))
write_font_metadata("Consolas8.font", FontMetrics(padding=4, glyph_width=7, glyph_height=12))
print(read_font_metadata("Consolas8.font"))
```

Input and frame pacing:

```python
from vgengine.frame import Key, KeyState, camera_movement, sleep_time_ms

keys = KeyState()
keys.key_down_event(Key.W)
print(camera_movement(keys))        # (0.0, 0.0, -2.0)
print(sleep_time_ms(60, 10.0))      # 6
keys.end_frame()
```

## What it does not do

The package has no renderer. It does not:
- open a window,
- rasterise triangles or draw text,
- render glyphs from a system font.

`write_atlas_bmp` stores pixel data that you supply.

The `frame` module describes what a frame asks of the platform and does nothing with the window itself. It does not provide these:
- a main loop,
- a window,
- a way to change display settings.

The package has no command-line program.