# -*- coding: utf-8 -*-
"""
ViewModel 层：连接 Model 与 View，暴露状态与命令，驱动 UI 更新。
- MainViewModel：体数据加载、三视图层号与 mm 换算，通过信号通知 View 刷新。
"""

from .main_view_model import MainViewModel

__all__ = ["MainViewModel"]
