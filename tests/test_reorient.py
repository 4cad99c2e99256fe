# -*- coding: utf-8 -*-
import itertools

import numpy as np
import pytest

from helpers import decode, encoded_volume
from models import (
    DegenerateOrientationError,
    VolumeLoadError,
    compute_axis_mapping,
    reorient_to_ras,
)


def signed_permutations():
    """全部 48 个带符号的轴置换矩阵。"""
    for perm in itertools.permutations(range(3)):
        for signs in itertools.product((1.0, -1.0), repeat=3):
            matrix = np.zeros((3, 3))
            for col, row in enumerate(perm):
                matrix[row, col] = signs[col]
            yield matrix


def test_identity_volume_is_unchanged():
    volume = encoded_volume((2, 3, 4))
    canonical, spacing, origin = reorient_to_ras(
        volume, np.eye(3), np.zeros(3), (1.0, 1.0, 1.0)
    )
    np.testing.assert_array_equal(canonical, volume)
    assert spacing == (1.0, 1.0, 1.0)
    assert origin == (0.0, 0.0, 0.0)


def test_mni_like_sform():
    direction = np.diag([-1.0, 1.0, 1.0])
    translation = np.array([90.0, -126.0, -72.0])
    mapping = compute_axis_mapping(direction)
    assert mapping.voxel_to_world == (0, 1, 2)
    assert mapping.flip == (True, False, False)

    volume = np.zeros((181, 217, 181), dtype=np.float32)
    volume[0, 5, 6] = 1.0
    canonical, spacing, origin = reorient_to_ras(
        volume, direction, translation, (1.0, 1.0, 1.0)
    )
    assert canonical.shape == (181, 217, 181)
    assert canonical[180, 5, 6] == 1.0
    assert spacing == (1.0, 1.0, 1.0)
    np.testing.assert_allclose(origin, [-90.0, -126.0, -72.0])


@pytest.mark.parametrize("direction", list(signed_permutations()))
def test_mapping_is_a_bijection(direction):
    mapping = compute_axis_mapping(direction)
    for c in range(3):
        assert mapping.world_to_voxel[mapping.voxel_to_world[c]] == c


@pytest.mark.parametrize("direction", list(signed_permutations()))
def test_every_voxel_lands_at_its_ras_position(direction):
    spacing = np.array([0.5, 2.0, 3.0])
    affine = direction * spacing[np.newaxis, :]
    translation = np.array([-10.0, 20.0, 5.0])
    volume = encoded_volume((2, 3, 4))

    canonical, ras_spacing, ras_origin = reorient_to_ras(
        volume, affine, translation, spacing
    )

    for index in itertools.product(*(range(n) for n in canonical.shape)):
        ijk = np.array(decode(canonical[index]), dtype=float)
        world = affine @ ijk + translation
        expected = np.array(ras_origin) + np.array(index) * np.array(ras_spacing)
        np.testing.assert_allclose(world, expected)


def test_permuted_axes_and_spacing():
    # i -> S, j -> -R, k -> A
    direction = np.array(
        [
            [0.0, -2.0, 0.0],
            [0.0, 0.0, 3.0],
            [1.0, 0.0, 0.0],
        ]
    )
    volume = encoded_volume((2, 3, 4))
    mapping = compute_axis_mapping(direction)
    assert mapping.voxel_to_world == (2, 0, 1)
    assert mapping.flip == (False, True, False)
    assert mapping.world_to_voxel == (1, 2, 0)
    assert mapping.needs_flip == (True, False, False)

    canonical, spacing, origin = reorient_to_ras(
        volume, direction, np.zeros(3), (1.0, 2.0, 3.0)
    )
    assert canonical.shape == (3, 4, 2)
    assert spacing == (2.0, 3.0, 1.0)
    np.testing.assert_allclose(origin, [-4.0, 0.0, 0.0])
    np.testing.assert_array_equal(
        canonical, np.transpose(volume, (1, 2, 0))[::-1, :, :]
    )


def test_slightly_oblique_affine_uses_dominant_axis():
    angle = np.deg2rad(10.0)
    rotation = np.array(
        [
            [np.cos(angle), -np.sin(angle), 0.0],
            [np.sin(angle), np.cos(angle), 0.0],
            [0.0, 0.0, 1.0],
        ]
    )
    mapping = compute_axis_mapping(rotation)
    assert mapping.voxel_to_world == (0, 1, 2)
    assert mapping.flip == (False, False, False)


def test_output_is_contiguous_float32():
    volume = encoded_volume((2, 3, 4)).astype(np.int16)
    canonical, _, _ = reorient_to_ras(
        volume, np.diag([-1.0, -1.0, 1.0]), np.zeros(3), (1.0, 1.0, 1.0)
    )
    assert canonical.dtype == np.float32
    assert canonical.flags.c_contiguous


def test_describe_mapping():
    mapping = compute_axis_mapping(np.diag([-1.0, 1.0, 1.0]))
    assert mapping.describe() == "i->-R, j->A, k->S"


def test_zero_column_is_degenerate():
    direction = np.diag([1.0, 0.0, 1.0])
    with pytest.raises(DegenerateOrientationError):
        compute_axis_mapping(direction)


def test_tied_column_is_degenerate():
    s = np.sqrt(0.5)
    direction = np.array([[s, -s, 0.0], [s, s, 0.0], [0.0, 0.0, 1.0]])
    with pytest.raises(DegenerateOrientationError):
        compute_axis_mapping(direction)


def test_non_bijective_mapping_is_degenerate():
    direction = np.array([[1.0, 0.9, 0.0], [0.0, 0.1, 0.0], [0.0, 0.0, 1.0]])
    with pytest.raises(DegenerateOrientationError, match="双射"):
        compute_axis_mapping(direction)


def test_degenerate_error_is_a_load_error():
    with pytest.raises(VolumeLoadError):
        reorient_to_ras(
            np.zeros((2, 2, 2)), np.zeros((3, 3)), np.zeros(3), (1.0, 1.0, 1.0)
        )


def test_non_3d_volume_is_rejected():
    with pytest.raises(VolumeLoadError):
        reorient_to_ras(np.zeros((2, 2)), np.eye(3), np.zeros(3), (1.0, 1.0, 1.0))
