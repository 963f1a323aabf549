import numpy as np
import pytest

from polytrack.dilate import Dilate

ONES = [1, 1, 1, 1, 1, 1, 1, 1, 1]


def frame(width, height):
    return np.zeros((height, width, 3), dtype=np.uint8)


def test_without_kernel_image_is_unchanged():
    img = frame(5, 5)
    img[2, 2] = 255
    out = Dilate(5, 5).execute(img)
    assert (out == img).all()


def test_square_kernel_grows_pixel_to_block():
    img = frame(7, 7)
    img[3, 3] = 255
    d = Dilate(7, 7)
    d.set_kernel(ONES, 3, 3)
    d.set_hot_spot(1, 1)
    out = d.execute(img)
    assert (out[2:5, 2:5] == 255).all()
    assert int((out[:, :, 0] == 255).sum()) == len(ONES)


def test_dilation_is_clipped_at_corner():
    img = frame(4, 4)
    img[0, 0] = 255
    d = Dilate(4, 4)
    d.set_kernel(ONES, 3, 3)
    d.set_hot_spot(1, 1)
    out = d.execute(img)
    assert (out[0:2, 0:2] == 255).all()
    assert int((out[:, :, 0] == 255).sum()) == 4


def test_zero_cells_are_not_set():
    img = frame(5, 5)
    img[2, 2] = 255
    d = Dilate(5, 5)
    d.set_kernel([0, 1, 0, 1, 1, 1, 0, 1, 0], 3, 3)
    d.set_hot_spot(1, 1)
    out = d.execute(img)
    white = out[:, :, 0] == 255
    assert white[1, 2] and white[3, 2] and white[2, 1] and white[2, 3]
    assert not white[1, 1] and not white[3, 3]


def test_hot_spot_shifts_dilation():
    img = frame(5, 3)
    img[1, 1] = 255
    d = Dilate(5, 3)
    d.set_kernel([1, 1], 2, 1)
    d.set_hot_spot(0, 0)
    out = d.execute(img)
    white = out[:, :, 0] == 255
    assert white[1, 1] and white[1, 2]
    assert not white[1, 0]


def test_result_is_superset_and_input_untouched():
    rng = np.random.default_rng(1)
    channel = np.where(rng.random((6, 8)) < 0.2, 255, 0).astype(np.uint8)
    img = np.repeat(channel[:, :, None], 3, axis=2)
    before = img.copy()
    d = Dilate(8, 6)
    d.set_kernel(ONES, 3, 3)
    d.set_hot_spot(1, 1)
    out = d.execute(img)
    assert (img == before).all()
    assert ((out[:, :, 0] == 255) | (img[:, :, 0] != 255)).all()


def test_accepts_bytes():
    img = frame(3, 3)
    img[1, 1] = 255
    d = Dilate(3, 3)
    d.set_kernel(ONES, 3, 3)
    d.set_hot_spot(1, 1)
    assert (d.execute(img.tobytes()) == 255).all()


def test_bad_kernel_size_raises():
    with pytest.raises(ValueError):
        Dilate(3, 3).set_kernel([1, 1, 1], 2, 2)


def test_bad_image_size_raises():
    with pytest.raises(ValueError):
        Dilate(3, 3).execute(np.zeros(5, dtype=np.uint8))