# -*- coding: utf-8 -*-
"""
Model 层：应用核心数据与领域对象。
- NiftiHeader / extract_affine：头信息与体素 -> 世界仿射
- reorient_to_ras：按主导分量将体数据重排为 RAS 朝向
- voxel_to_mm / mm_to_voxel：RAS 索引与 LPS 显示坐标换算
- extract_slices：三个正交切面
- load_volume / RasVolume：nibabel 读头 + SimpleITK 解码的加载流程与结果封装
- AppState / ViewerConfig：全局应用状态与配置
"""

from .affine import apply_affine, extract_affine, quaternion_to_rotation
from .app_state import AppState
from .coordinates import mm_range, mm_to_voxel, voxel_to_mm
from .errors import DegenerateOrientationError, VolumeLoadError
from .header import NiftiHeader, OrientationSource
from .loader import DecodedScan, build_ras_volume, load_volume
from .ras_volume import RasVolume
from .reorient import AxisMapping, compute_axis_mapping, reorient_to_ras
from .slices import (
    ORIENTATION_AXIS,
    extract_slices,
    fit_size,
    normalize_to_uint8,
    to_display_orientation,
)
from .viewer_config import ViewerConfig

__all__ = [
    "AppState",
    "AxisMapping",
    "DecodedScan",
    "DegenerateOrientationError",
    "NiftiHeader",
    "ORIENTATION_AXIS",
    "OrientationSource",
    "RasVolume",
    "ViewerConfig",
    "VolumeLoadError",
    "apply_affine",
    "build_ras_volume",
    "compute_axis_mapping",
    "extract_affine",
    "extract_slices",
    "fit_size",
    "load_volume",
    "mm_range",
    "mm_to_voxel",
    "normalize_to_uint8",
    "quaternion_to_rotation",
    "reorient_to_ras",
    "to_display_orientation",
    "voxel_to_mm",
]
