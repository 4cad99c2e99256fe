# -*- coding: utf-8 -*-
"""
查看器配置（Model）。
默认值集中在 dataclass 上，日志级别可由环境变量 TRIVIEW_LOG_LEVEL 覆盖。
"""

import os
from dataclasses import dataclass, replace
from typing import Tuple


@dataclass(frozen=True)
class ViewerConfig:
    window_title: str = "NIfTI 三视图浏览器"
    window_size: Tuple[int, int] = (800, 800)
    # 滚轮累计多少角度单位切换一层（Qt 中一格为 120）
    wheel_step: float = 120.0
    file_filter: str = "体数据 (*.nii *.nii.gz *.mha *.mhd *.nrrd);;所有文件 (*)"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    @classmethod
    def from_env(cls) -> "ViewerConfig":
        config = cls()
        level = os.environ.get("TRIVIEW_LOG_LEVEL")
        if level:
            config = replace(config, log_level=level.upper())
        return config
