# polytrack

A small image-processing library for finding and tracking blobs in video
frames and for scoring colours against a polynomial Mahalanobis model.

Frames are interleaved 3-channel byte images: `width * height * 3` values in
row-major order. Functions accept `bytes`, `bytearray`, lists or NumPy arrays
of that size and return NumPy arrays of shape `(height, width, 3)`.

## Install

```
pip install .
pip install ".[test]"   # also installs pytest
```

## Modules

- `polytrack.labeling`: `Labeling(width, height)` labels 4-connected regions
  of pixels whose first channel is 0. `execute(image)` returns a list of
  `LabeledObject` (index, area, centre `Point`, and the leftmost, rightmost,
  top and bottom points); the labelling object also supports `len()`,
  indexing and iteration, and keeps the label image in `index_map`.
- `polytrack.dilate`: `Dilate(width, height)` with `set_kernel(kernel, kw, kh)`
  and `set_hot_spot(x, y)`; `execute(image)` grows the white (255) pixels by
  the non-zero cells of the kernel.
- `polytrack.diff_gray`: `DiffGray(width, height)` smooths the first channel
  of a grey frame. `execute(image, iterations, lam)` runs edge-preserving
  nonlinear diffusion and writes the result to all three channels;
  `box_average(image, iterations, lam)` is a weighted 3x3 average (centre
  counted three times, `lam` unused). Border pixels are left unchanged.
  `conductance(v, w, lam)` is the diffusivity used.
- `polytrack.frame_objects`: `FrameObjects(width, height)` thresholds a frame
  at 128, dilates it with a 3x3 kernel, labels it and paints white the objects
  whose area exceeds `min_area` (200 by default). `object_list()` returns
  those objects for the last frame.
- `polytrack.trajectories`: `Trajectories`, a list of trajectories, each a
  list of `TrajectoryPoint(x, y, tr_index, time_step)`.
- `polytrack.tracking`: `Tracker(width, height)`. `add_bin_frame(frame)`
  treats values above 50 as objects, labels them and links each one to the
  nearest unmatched object (closer than 80 pixels) in up to five earlier
  frames; unmatched objects start new trajectories.
  `trajectories(n_last_frames, time_step)` collects the trajectories seen in
  the last frames (`time_step` of -1 means no limit).
- `polytrack.background`: `BackgroundModel(width, height)` keeps the recent
  frames; once 20 are held, pixels of the newest frame that changed strongly
  are replaced by a blend of the mean of the earlier frames. `model()`
  returns the current estimate.
- `polytrack.camera_control`: `CameraControl(device="/dev/video0")` sends
  pan, tilt, focus and reset commands to a UVC camera by running the
  `uvcdynctrl` tool. If the tool is not installed, `available` is false and
  pan, tilt, reset and device changes do nothing.
- `polytrack.pattern`: `Pattern(coordinates, data)` holds training samples;
  `load_pattern(filename)` reads a file with a sample count followed by
  `x y v1 v2 v3` per sample (lines starting with `#` are comments).
- `polytrack.poly_utils`: matrix helpers (means, column pairs, cross terms,
  variances, dropping null columns).
- `polytrack.poly_model`: `make_space(pattern, order)` builds a `PolyModel`
  of up to `order` `LevelBasis` levels.
- `polytrack.poly_mahalanobis`: `PolyMahalanobis` trains on a pattern and
  scores samples.

## Example

```python
import numpy as np
from polytrack.pattern import load_pattern
from polytrack.poly_mahalanobis import PolyMahalanobis

classifier = PolyMahalanobis()
classifier.set_pattern(load_pattern("conf.maha"))
classifier.make_space(3)

pixels = np.array([[120.0, 80.0, 60.0], [10.0, 200.0, 30.0]])
scores = classifier.evaluate_to_center(pixels)
# scores has shape (3, 2): row k is the distance summed over levels 1..k+1
```

Tracking objects across binary frames:

```python
from polytrack.tracking import Tracker

tracker = Tracker(320, 240)
for frame in frames:          # 320 * 240 * 3 byte values each
    tracker.add_bin_frame(frame)

for path in tracker.trajectories(10, -1):
    print([(p.x, p.y) for p in path])
```

## What it does not do

This is a library only. It does not capture frames from a camera or video
file, has no window or display of results, and installs no command; feed it
frames obtained some other way and present its results yourself.
`make_space` raises `ValueError` when a level has fewer samples than
dimensions.

## Tests

```
pytest
```