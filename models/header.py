# -*- coding: utf-8 -*-
"""
NIfTI 头信息记录（Model）。
仅保存与空间方向相关的字段，由 loader 从 SimpleITK 元数据中填充。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class OrientationSource(Enum):
    """方向信息来源：sform 优先于 qform，二者皆无时仅使用体素间距。"""

    SFORM = "sform"
    QFORM = "qform"
    SPACING_ONLY = "spacing_only"


Row4 = Tuple[float, float, float, float]


@dataclass(frozen=True)
class NiftiHeader:
    """
    不可变的头信息记录。
    - srow_x/y/z：sform 仿射矩阵的三行 (4 列，最后一列为平移)
    - quatern_b/c/d：qform 四元数虚部；quatern_x/y/z：qform 平移 (qoffset)
    - pixdim[0] 为 qfac 符号位，pixdim[1..3] 为体素间距
    """

    sform_code: int = 0
    qform_code: int = 0
    srow_x: Row4 = (0.0, 0.0, 0.0, 0.0)
    srow_y: Row4 = (0.0, 0.0, 0.0, 0.0)
    srow_z: Row4 = (0.0, 0.0, 0.0, 0.0)
    quatern_b: float = 0.0
    quatern_c: float = 0.0
    quatern_d: float = 0.0
    quatern_x: float = 0.0
    quatern_y: float = 0.0
    quatern_z: float = 0.0
    pixdim: Row4 = (1.0, 1.0, 1.0, 1.0)

    @property
    def orientation_source(self) -> OrientationSource:
        if self.sform_code > 0:
            return OrientationSource.SFORM
        if self.qform_code > 0:
            return OrientationSource.QFORM
        return OrientationSource.SPACING_ONLY

    @property
    def qfac(self) -> float:
        """qform 第三轴的手性符号。"""
        return -1.0 if self.pixdim[0] < 0 else 1.0

    @property
    def spacing(self) -> Tuple[float, float, float]:
        """原始体素轴顺序下的体素间距 (mm)，取绝对值，方向由仿射矩阵负责。"""
        return (abs(self.pixdim[1]), abs(self.pixdim[2]), abs(self.pixdim[3]))
