# -*- coding: utf-8 -*-
import numpy as np
import pytest

from helpers import encoded_volume
from models import extract_slices, fit_size, normalize_to_uint8, to_display_orientation


def test_planes_hold_one_axis_fixed():
    volume = encoded_volume((3, 4, 5))
    sagittal, coronal, axial = extract_slices(volume, 1, 2, 3)
    assert sagittal.shape == (4, 5)
    assert coronal.shape == (3, 5)
    assert axial.shape == (3, 4)
    np.testing.assert_array_equal(sagittal, volume[1, :, :])
    np.testing.assert_array_equal(coronal, volume[:, 2, :])
    np.testing.assert_array_equal(axial, volume[:, :, 3])


def test_planes_are_read_only():
    volume = encoded_volume((3, 4, 5))
    sagittal, _, _ = extract_slices(volume, 0, 0, 0)
    with pytest.raises(ValueError):
        sagittal[0, 0] = 1.0
    assert volume.flags.writeable


def test_no_volume():
    assert extract_slices(None, 0, 0, 0) is None


def test_out_of_range_indices_are_clamped():
    volume = encoded_volume((3, 4, 5))
    sagittal, coronal, axial = extract_slices(volume, 99, -4, 5)
    np.testing.assert_array_equal(sagittal, volume[2, :, :])
    np.testing.assert_array_equal(coronal, volume[:, 0, :])
    np.testing.assert_array_equal(axial, volume[:, :, 4])


def test_display_orientation_transposes_and_reverses():
    plane = np.array([[1, 2], [3, 4], [5, 6]])
    np.testing.assert_array_equal(
        to_display_orientation(plane), [[6, 4, 2], [5, 3, 1]]
    )


def test_normalize_to_uint8():
    out = normalize_to_uint8(np.array([[0.0, 5.0, 10.0]]))
    assert out.dtype == np.uint8
    np.testing.assert_array_equal(out, [[0, 127, 255]])


def test_normalize_constant_plane():
    out = normalize_to_uint8(np.full((2, 2), 7.0))
    np.testing.assert_array_equal(out, np.zeros((2, 2), dtype=np.uint8))


def test_fit_size_preserves_physical_aspect():
    assert fit_size(100, 50, 1.0, 2.0, 200.0, 200.0) == pytest.approx((200.0, 200.0))
    assert fit_size(200, 100, 1.0, 1.0, 100.0, 100.0) == pytest.approx((100.0, 50.0))
