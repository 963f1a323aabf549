import numpy as np
import pytest

from polytrack.labeling import Labeling, LabeledObject, Point


def blank(width, height):
    return np.full((height, width, 3), 255, dtype=np.uint8)


def test_empty_frame_has_no_objects():
    lab = Labeling(6, 4)
    assert lab.execute(blank(6, 4)) == []
    assert len(lab) == 0
    assert not lab.index_map.any()


def test_single_pixel_object():
    img = blank(5, 5)
    img[2, 3] = 0
    lab = Labeling(5, 5)
    lab.execute(img)
    assert len(lab) == 1
    obj = lab[0]
    assert obj.index == 1
    assert obj.area == 1
    assert obj.center == Point(3, 2)
    assert all(p == Point(3, 2) for p in obj.limits)


def test_rectangle_area_center_and_limits():
    x0, x1, y0, y1 = 2, 6, 1, 3
    img = blank(10, 6)
    img[y0 : y1 + 1, x0 : x1 + 1] = 0
    lab = Labeling(10, 6)
    lab.execute(img)
    assert len(lab) == 1
    obj = lab[0]
    assert obj.area == (x1 - x0 + 1) * (y1 - y0 + 1)
    xs, ys = np.nonzero(img[:, :, 0] == 0)[1], np.nonzero(img[:, :, 0] == 0)[0]
    assert obj.center == Point(int(xs.sum()) // obj.area, int(ys.sum()) // obj.area)
    assert obj.leftmost.x == x0
    assert obj.rightmost.x == x1
    assert obj.top.y == y0
    assert obj.bottom.y == y1


def test_objects_numbered_in_scan_order():
    img = blank(8, 8)
    img[0:2, 5:7] = 0
    img[5:8, 0:3] = 0
    lab = Labeling(8, 8)
    objects = lab.execute(img)
    assert [o.index for o in objects] == [1, 2]
    assert objects[0].area == 4
    assert objects[1].area == 9
    assert (lab.index_map[0:2, 5:7] == 1).all()
    assert (lab.index_map[5:8, 0:3] == 2).all()


def test_diagonal_pixels_are_separate_objects():
    img = blank(4, 4)
    img[0, 0] = 0
    img[1, 1] = 0
    lab = Labeling(4, 4)
    lab.execute(img)
    assert len(lab) == 2


def test_areas_cover_all_foreground_pixels():
    rng = np.random.default_rng(3)
    channel = np.where(rng.random((12, 15)) < 0.5, 0, 255).astype(np.uint8)
    img = np.repeat(channel[:, :, None], 3, axis=2)
    lab = Labeling(15, 12)
    objects = lab.execute(img)
    foreground = channel == 0
    assert sum(o.area for o in objects) == int(foreground.sum())
    assert ((lab.index_map > 0) == foreground).all()
    for obj in objects:
        assert int((lab.index_map == obj.index).sum()) == obj.area
        assert obj.leftmost.x <= obj.center.x <= obj.rightmost.x
        assert obj.top.y <= obj.center.y <= obj.bottom.y


def test_u_shape_is_one_object():
    img = blank(5, 4)
    img[0:4, 0] = 0
    img[0:4, 4] = 0
    img[3, 0:5] = 0
    lab = Labeling(5, 4)
    lab.execute(img)
    assert len(lab) == 1
    assert lab[0].area == int((img[:, :, 0] == 0).sum())


def test_accepts_flat_buffer_and_two_dimensional_input():
    img = blank(3, 3)
    img[1, 1] = 0
    flat = Labeling(3, 3)
    flat.execute(img.tobytes())
    plane = Labeling(3, 3)
    plane.execute(img[:, :, 0])
    assert flat[0] == plane[0]


def test_execute_resets_previous_result():
    img = blank(4, 4)
    img[0, 0] = 0
    lab = Labeling(4, 4)
    lab.execute(img)
    lab.execute(blank(4, 4))
    assert len(lab) == 0
    assert not lab.index_map.any()


def test_wrong_size_raises():
    with pytest.raises(ValueError):
        Labeling(4, 4).execute(np.zeros(10, dtype=np.uint8))


def test_index_out_of_range_raises():
    lab = Labeling(2, 2)
    result = lab.execute(blank(2, 2))
    assert result == []
    assert len(lab) == 0
    with pytest.raises(IndexError):
        lab[0]


def test_object_is_immutable():
    obj = LabeledObject(1, 1, Point(0, 0), (Point(0, 0),) * 4)
    with pytest.raises(AttributeError):
        obj.area = 3
    assert obj.area == 1