# -*- coding: utf-8 -*-
import numpy as np

from models import NiftiHeader, apply_affine, extract_affine, quaternion_to_rotation


def test_quaternion_identity():
    np.testing.assert_allclose(quaternion_to_rotation(0.0, 0.0, 0.0), np.eye(3))


def test_quaternion_half_turn_about_z():
    np.testing.assert_allclose(
        quaternion_to_rotation(0.0, 0.0, 1.0), np.diag([-1.0, -1.0, 1.0]), atol=1e-12
    )


def test_quaternion_norm_slightly_above_one_is_tolerated():
    rotation = quaternion_to_rotation(0.7072, 0.7072, 0.0)
    assert np.all(np.isfinite(rotation))
    # a 截断为 0：x、y 轴互换，z 轴反向
    np.testing.assert_allclose(
        rotation, [[0.0, 1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, -1.0]], atol=1e-3
    )


def test_sform_rows_and_translation():
    header = NiftiHeader(
        sform_code=1,
        qform_code=1,
        srow_x=(-1.0, 0.0, 0.0, 90.0),
        srow_y=(0.0, 1.0, 0.0, -126.0),
        srow_z=(0.0, 0.0, 1.0, -72.0),
        quatern_d=1.0,
    )
    direction, translation = extract_affine(header)
    np.testing.assert_allclose(direction, np.diag([-1.0, 1.0, 1.0]))
    np.testing.assert_allclose(translation, [90.0, -126.0, -72.0])


def test_qform_scales_columns_and_applies_qfac():
    header = NiftiHeader(
        qform_code=1,
        quatern_x=5.0,
        quatern_y=-6.0,
        quatern_z=7.0,
        pixdim=(-1.0, 2.0, 3.0, 4.0),
    )
    direction, translation = extract_affine(header)
    np.testing.assert_allclose(direction, np.diag([2.0, 3.0, -4.0]))
    np.testing.assert_allclose(translation, [5.0, -6.0, 7.0])


def test_qform_with_rotation():
    header = NiftiHeader(qform_code=1, quatern_d=1.0, pixdim=(1.0, 0.5, 0.5, 2.0))
    direction, _ = extract_affine(header)
    np.testing.assert_allclose(direction, np.diag([-0.5, -0.5, 2.0]), atol=1e-12)


def test_spacing_only():
    header = NiftiHeader(pixdim=(0.0, 1.5, 2.5, 3.5))
    direction, translation = extract_affine(header)
    np.testing.assert_allclose(direction, np.diag([1.5, 2.5, 3.5]))
    np.testing.assert_allclose(translation, np.zeros(3))


def test_apply_affine():
    direction = np.diag([-1.0, 1.0, 1.0])
    translation = np.array([90.0, -126.0, -72.0])
    np.testing.assert_allclose(
        apply_affine(direction, translation, [180, 0, 0]), [-90.0, -126.0, -72.0]
    )
