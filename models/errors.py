# -*- coding: utf-8 -*-
"""
加载流程中的异常类型（Model）。
一次加载失败只影响本次加载，不影响已发布的体数据。
"""


class VolumeLoadError(RuntimeError):
    """体数据加载失败：文件不可读、非三维、体素间距非法或方向矩阵退化。"""


class DegenerateOrientationError(VolumeLoadError):
    """方向矩阵无法分解为轴置换 + 翻转（某列无明显主导行，或映射不是双射）。"""
