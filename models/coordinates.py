# -*- coding: utf-8 -*-
"""
RAS 体素索引与显示坐标 (mm) 的相互换算。
显示坐标采用 LPS 约定：R、A 两轴取反（值增大 = 更靠左 / 更靠后），S 轴不变。
均为无副作用的纯函数，可在每次界面刷新时调用。
"""

import math
from typing import Sequence, Tuple


def _is_negated(axis: int) -> bool:
    if axis not in (0, 1, 2):
        raise ValueError(f"axis 必须为 0/1/2，实际为 {axis}")
    return axis < 2


def voxel_to_mm(
    axis: int,
    index: int,
    spacing: Sequence[float],
    origin: Sequence[float],
) -> float:
    """RAS 索引 -> 显示坐标 (mm)。"""
    negate = _is_negated(axis)
    ras = origin[axis] + index * spacing[axis]
    return -ras if negate else ras


def mm_to_voxel(
    axis: int,
    mm: float,
    spacing: Sequence[float],
    origin: Sequence[float],
    shape: Sequence[int],
) -> int:
    """显示坐标 (mm) -> 最近的 RAS 索引，截断到 [0, shape[axis]-1]。"""
    ras = -mm if _is_negated(axis) else mm
    # 四舍五入（.5 向上）；负值最终都会被截断为 0
    idx = math.floor((ras - origin[axis]) / spacing[axis] + 0.5)
    return int(min(max(idx, 0), shape[axis] - 1))


def mm_range(
    axis: int,
    spacing: Sequence[float],
    origin: Sequence[float],
    shape: Sequence[int],
) -> Tuple[float, float]:
    """某轴首尾体素的显示坐标范围 (low, high)，供滑条设置上下限。"""
    first = voxel_to_mm(axis, 0, spacing, origin)
    last = voxel_to_mm(axis, shape[axis] - 1, spacing, origin)
    return min(first, last), max(first, last)
