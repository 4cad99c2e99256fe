# -*- coding: utf-8 -*-
"""
从 RAS 体数据中取三个正交切面，以及显示前的统一变换。
- 矢状位 sagittal：固定 R 轴 (轴 0)，平面为 (A, S)
- 冠状位 coronal：固定 A 轴 (轴 1)，平面为 (R, S)
- 轴状位 axial：固定 S 轴 (轴 2)，平面为 (R, A)
"""

from typing import Optional, Tuple

import numpy as np

# 朝向名称 -> 被固定的 RAS 轴
ORIENTATION_AXIS = {"sagittal": 0, "coronal": 1, "axial": 2}


def _readonly(plane: np.ndarray) -> np.ndarray:
    view = plane.view()
    view.flags.writeable = False
    return view


def extract_slices(
    volume: Optional[np.ndarray],
    slice_x: int,
    slice_y: int,
    slice_z: int,
) -> Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]]:
    """
    返回 (sagittal, coronal, axial) 三个只读二维视图；未加载体数据时返回 None。
    层号超出范围时截断到 [0, dim-1]。
    """
    if volume is None:
        return None
    nx, ny, nz = volume.shape
    x = int(np.clip(slice_x, 0, nx - 1))
    y = int(np.clip(slice_y, 0, ny - 1))
    z = int(np.clip(slice_z, 0, nz - 1))
    sagittal = _readonly(volume[x, :, :])  # (A, S)
    coronal = _readonly(volume[:, y, :])  # (R, S)
    axial = _readonly(volume[:, :, z])  # (R, A)
    return sagittal, coronal, axial


def to_display_orientation(plane: np.ndarray) -> np.ndarray:
    """
    转置后上下、左右同时翻转：上方为 S/A，左右采用放射学约定（患者右侧在屏幕左侧）。
    三个切面使用同一变换。
    """
    return np.ascontiguousarray(plane.T[::-1, ::-1])


def normalize_to_uint8(plane: np.ndarray) -> np.ndarray:
    """按切面自身的最小/最大值线性拉伸到 0~255；常数切面输出全 0。"""
    plane = np.asarray(plane, dtype=np.float32)
    low = float(np.min(plane))
    high = float(np.max(plane))
    if not np.isfinite(low) or not np.isfinite(high) or high <= low:
        return np.zeros(plane.shape, dtype=np.uint8)
    norm = np.clip((plane - low) / (high - low), 0.0, 1.0)
    return np.ascontiguousarray((norm * 255).astype(np.uint8))


def fit_size(
    n_w: int,
    n_h: int,
    vox_w: float,
    vox_h: float,
    max_w: float,
    max_h: float,
) -> Tuple[float, float]:
    """按物理尺寸（体素数 × 间距）保持长宽比，缩放到不超过 (max_w, max_h)。"""
    phys_w = n_w * vox_w
    phys_h = n_h * vox_h
    if phys_w <= 0 or phys_h <= 0:
        return 0.0, 0.0
    scale = min(max_w / phys_w, max_h / phys_h)
    return phys_w * scale, phys_h * scale
