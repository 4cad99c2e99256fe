# -*- coding: utf-8 -*-
"""
将体数据重排到 RAS 标准朝向（Model）。
轴 0/1/2 索引增大分别对应 Right / Anterior / Superior。
仅支持轴置换 + 翻转 + 各轴独立缩放，不做重采样；斜切/旋转仿射按主导分量近似。
"""

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .affine import apply_affine
from .errors import DegenerateOrientationError, VolumeLoadError

logger = logging.getLogger(__name__)

AXIS_NAMES = ("R", "A", "S")
# 同一列中次大分量与最大分量的相对容差，超过即视为无明显主导行
_DOMINANCE_RTOL = 1e-6


@dataclass(frozen=True)
class AxisMapping:
    """
    原始体素轴与世界轴 (0=R, 1=A, 2=S) 的对应关系。
    - voxel_to_world[c]：原始体素轴 c 对应的世界轴
    - flip[c]：沿体素轴 c 前进时世界坐标是否减小
    - world_to_voxel[a]：世界轴 a 对应的原始体素轴
    """

    voxel_to_world: Tuple[int, int, int]
    flip: Tuple[bool, bool, bool]
    world_to_voxel: Tuple[int, int, int]

    @property
    def needs_flip(self) -> Tuple[bool, bool, bool]:
        """按 RAS 输出轴顺序给出的翻转标志。"""
        return tuple(self.flip[v] for v in self.world_to_voxel)

    def describe(self) -> str:
        """如 "i->-R, j->A, k->S"，用于日志。"""
        parts = []
        for c, name in enumerate("ijk"):
            sign = "-" if self.flip[c] else ""
            parts.append(f"{name}->{sign}{AXIS_NAMES[self.voxel_to_world[c]]}")
        return ", ".join(parts)


def compute_axis_mapping(direction: np.ndarray) -> AxisMapping:
    """
    主导分量启发式：对每一列（原始体素轴）取绝对值最大的行作为对应世界轴。
    列全零、最大分量并列或多列选中同一世界轴时抛出 DegenerateOrientationError。
    """
    direction = np.asarray(direction, dtype=np.float64)
    if direction.shape != (3, 3):
        raise DegenerateOrientationError(
            f"方向矩阵应为 3x3，实际为 {direction.shape}"
        )
    if not np.all(np.isfinite(direction)):
        raise DegenerateOrientationError("方向矩阵包含 NaN 或 Inf")

    voxel_to_world = []
    flip = []
    for col in range(3):
        magnitudes = np.abs(direction[:, col])
        order = np.argsort(magnitudes)[::-1]
        best, runner_up = magnitudes[order[0]], magnitudes[order[1]]
        if best == 0.0:
            raise DegenerateOrientationError(f"体素轴 {col} 的方向向量为零")
        if np.isclose(runner_up, best, rtol=_DOMINANCE_RTOL, atol=0.0):
            raise DegenerateOrientationError(
                f"体素轴 {col} 没有明显的主导世界轴：{direction[:, col].tolist()}"
            )
        row = int(order[0])
        voxel_to_world.append(row)
        flip.append(bool(direction[row, col] < 0))

    if sorted(voxel_to_world) != [0, 1, 2]:
        raise DegenerateOrientationError(
            f"体素轴到世界轴的映射不是双射：{voxel_to_world}"
        )

    world_to_voxel = [0, 0, 0]
    for col, row in enumerate(voxel_to_world):
        world_to_voxel[row] = col

    return AxisMapping(tuple(voxel_to_world), tuple(flip), tuple(world_to_voxel))


def reorient_to_ras(
    volume: np.ndarray,
    direction: np.ndarray,
    translation: np.ndarray,
    spacing: Sequence[float],
) -> Tuple[np.ndarray, Tuple[float, float, float], Tuple[float, float, float]]:
    """
    将原始体素顺序的 volume 重排为 RAS 朝向。
    返回 (canonical, ras_spacing, ras_origin)：
    - canonical：C 连续 float32 数组，轴顺序 (R, A, S)
    - ras_spacing：RAS 轴顺序的体素间距
    - ras_origin：重排后体素 (0,0,0) 的 RAS 世界坐标 (mm)
    """
    volume = np.asarray(volume)
    if volume.ndim != 3:
        raise VolumeLoadError(f"仅支持三维体数据，实际维度为 {volume.ndim}")

    mapping = compute_axis_mapping(direction)
    w2v = mapping.world_to_voxel
    needs_flip = mapping.needs_flip

    ras_spacing = tuple(float(spacing[v]) for v in w2v)

    # 置换与翻转组合为同一个视图，只在最后复制一次
    view = np.transpose(volume, w2v)
    view = view[tuple(slice(None, None, -1) if f else slice(None) for f in needs_flip)]
    canonical = np.ascontiguousarray(view, dtype=np.float32)

    # 新体素 (0,0,0) 在原始体素中的位置：翻转轴取末端，否则取 0
    orig_ijk = np.zeros(3, dtype=np.float64)
    for a in range(3):
        v = w2v[a]
        orig_ijk[v] = volume.shape[v] - 1 if needs_flip[a] else 0
    ras_origin = tuple(
        float(x) for x in apply_affine(np.asarray(direction, dtype=np.float64), translation, orig_ijk)
    )

    logger.debug(
        "reoriented %s -> %s (%s), origin=%s",
        volume.shape, canonical.shape, mapping.describe(), ras_origin,
    )
    return canonical, ras_spacing, ras_origin
