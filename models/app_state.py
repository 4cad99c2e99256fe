# -*- coding: utf-8 -*-
"""
全局应用状态（Model）。
供 ViewModel 读写，View 通过 ViewModel 间接访问。
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .ras_volume import RasVolume


@dataclass
class AppState:
    """
    全局应用状态。
    - volume：当前 RAS 体数据，加载成功后整体替换
    - slice_x / slice_y / slice_z：矢状位 / 冠状位 / 轴状位的当前层号
    - scroll_accum：三个轴上尚未换算成层号的滚轮累计量
    """

    volume: Optional[RasVolume] = None
    slice_x: int = 0
    slice_y: int = 0
    slice_z: int = 0
    scroll_accum: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    # 最近一次加载失败的提示，成功加载后清空
    error_msg: Optional[str] = None

    def publish(self, volume: RasVolume) -> None:
        """替换体数据并将层号置于中心。"""
        self.volume = volume
        self.slice_x, self.slice_y, self.slice_z = volume.center_indices()
        self.scroll_accum = [0.0, 0.0, 0.0]
        self.error_msg = None

    def get_index(self, axis: int) -> int:
        return (self.slice_x, self.slice_y, self.slice_z)[axis]

    def set_index(self, axis: int, value: int) -> None:
        if axis == 0:
            self.slice_x = value
        elif axis == 1:
            self.slice_y = value
        else:
            self.slice_z = value
