# -*- coding: utf-8 -*-
"""
RAS 体数据封装（Model）。
持有重排后的数组、RAS 顺序的体素间距与原点，不包含 UI 与加载流程。
"""

from pathlib import Path
from typing import Dict, Optional, Tuple

import numpy as np

from . import coordinates


class RasVolume:
    """
    RAS 朝向的体数据。
    - array 维度为 (R, A, S)，索引增大即更靠右 / 更靠前 / 更靠上
    - spacing、origin 均按 (R, A, S) 顺序，origin 为体素 (0,0,0) 的 RAS 坐标 (mm)
    """

    def __init__(
        self,
        array: np.ndarray,
        spacing: Tuple[float, float, float],
        origin: Tuple[float, float, float],
        source: Optional[Path] = None,
        patient_info: Optional[Dict[str, str]] = None,
    ):
        self.array = array
        self.spacing = spacing
        self.origin = origin
        self.source = source
        self.patient_info = patient_info or {}

    @property
    def shape(self) -> Tuple[int, int, int]:
        """体数据形状 (R, A, S)。"""
        return self.array.shape

    def center_indices(self) -> Tuple[int, int, int]:
        nx, ny, nz = self.shape
        return nx // 2, ny // 2, nz // 2

    def voxel_to_mm(self, axis: int, index: int) -> float:
        return coordinates.voxel_to_mm(axis, index, self.spacing, self.origin)

    def mm_to_voxel(self, axis: int, mm: float) -> int:
        return coordinates.mm_to_voxel(axis, mm, self.spacing, self.origin, self.shape)

    def mm_range(self, axis: int) -> Tuple[float, float]:
        return coordinates.mm_range(axis, self.spacing, self.origin, self.shape)

    def intensity_range(self) -> Tuple[float, float]:
        """全体数据的最小/最大值，供状态栏显示。"""
        return float(np.min(self.array)), float(np.max(self.array))
