# -*- coding: utf-8 -*-
"""
从头信息提取体素 -> 世界坐标 (RAS, mm) 的仿射变换。
返回 3x3 方向矩阵（第 c 列 = 原始体素轴 c 上前进一步的世界位移）与平移向量
（原始体素 (0,0,0) 的世界坐标）。
"""

from typing import Sequence, Tuple

import numpy as np

from .header import NiftiHeader, OrientationSource


def quaternion_to_rotation(b: float, c: float, d: float) -> np.ndarray:
    """
    由四元数虚部 (b, c, d) 构造 3x3 旋转矩阵。
    实部 a = sqrt(1 - b² - c² - d²)，舍入误差导致根号下为负时截断为 0。
    """
    b, c, d = float(b), float(c), float(d)
    a = np.sqrt(max(0.0, 1.0 - b * b - c * c - d * d))
    return np.array(
        [
            [a * a + b * b - c * c - d * d, 2 * (b * c - a * d), 2 * (b * d + a * c)],
            [2 * (b * c + a * d), a * a + c * c - b * b - d * d, 2 * (c * d - a * b)],
            [2 * (b * d - a * c), 2 * (c * d + a * b), a * a + d * d - b * b - c * c],
        ],
        dtype=np.float64,
    )


def extract_affine(header: NiftiHeader) -> Tuple[np.ndarray, np.ndarray]:
    """返回 (direction, translation)，分别为 (3, 3) 与 (3,) 的 float64 数组。"""
    source = header.orientation_source
    pixdim = header.pixdim

    if source is OrientationSource.SFORM:
        rows = np.array([header.srow_x, header.srow_y, header.srow_z], dtype=np.float64)
        return rows[:, :3].copy(), rows[:, 3].copy()

    if source is OrientationSource.QFORM:
        rotation = quaternion_to_rotation(
            header.quatern_b, header.quatern_c, header.quatern_d
        )
        # 按列缩放：第三列额外乘 qfac
        scale = np.array([pixdim[1], pixdim[2], pixdim[3] * header.qfac], dtype=np.float64)
        translation = np.array(
            [header.quatern_x, header.quatern_y, header.quatern_z], dtype=np.float64
        )
        return rotation * scale[np.newaxis, :], translation

    # 无方向信息：单位方向 + 体素间距
    direction = np.diag(np.array(pixdim[1:4], dtype=np.float64))
    return direction, np.zeros(3, dtype=np.float64)


def apply_affine(
    direction: np.ndarray, translation: np.ndarray, ijk: Sequence[float]
) -> np.ndarray:
    """world[k] = Σ_j direction[k][j] * ijk[j] + translation[k]"""
    return direction @ np.asarray(ijk, dtype=np.float64) + translation
