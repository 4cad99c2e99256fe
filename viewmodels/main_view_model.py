# -*- coding: utf-8 -*-
"""
主界面 ViewModel（MVVM）。
负责：体数据加载、三视图层号状态、mm 与层号换算、切片显示图像生成。
View 通过信号接收刷新通知，通过方法获取展示数据与执行命令。
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import numpy as np
from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QImage

from models import (
    ORIENTATION_AXIS,
    AppState,
    RasVolume,
    ViewerConfig,
    VolumeLoadError,
    extract_slices,
    fit_size,
    load_volume,
    normalize_to_uint8,
    to_display_orientation,
)

logger = logging.getLogger(__name__)

# 显示图像的 (宽, 高) 分别对应的 RAS 轴
_PLANE_AXES = {"sagittal": (1, 2), "coronal": (0, 2), "axial": (0, 1)}
# 标题与坐标轴字母
_TITLES = {
    "sagittal": ("矢状位", "X"),
    "coronal": ("冠状位", "Y"),
    "axial": ("轴状位", "Z"),
}


class MainViewModel(QObject):
    """
    主界面 ViewModel。
    - 持有 AppState，提供加载体数据、设置层号（索引 / mm / 滚轮）等命令
    - 提供按朝向生成的切片 QImage 与标题文字，供 View 直接显示
    - 发出信号：volume_loaded, slices_changed, patient_info_changed, status_message, error_changed
    """

    # 体数据加载完成（View 据此重建滑条范围并刷新三视图）
    volume_loaded = Signal()
    # 任一视图层号变化
    slices_changed = Signal()
    # 患者信息更新（仅 DICOM 序列）
    patient_info_changed = Signal()
    # 状态栏文案
    status_message = Signal(str)
    # 加载错误提示，空字符串表示无错误
    error_changed = Signal(str)

    def __init__(self, config: Optional[ViewerConfig] = None, parent=None):
        super().__init__(parent)
        self._config = config or ViewerConfig()
        self._app_state = AppState()

    @property
    def app_state(self) -> AppState:
        return self._app_state

    @property
    def config(self) -> ViewerConfig:
        return self._config

    @property
    def volume(self) -> Optional[RasVolume]:
        """当前 RAS 体数据，未加载时为 None。"""
        return self._app_state.volume

    # ---------- 命令：数据加载 ----------

    def load_path(self, path: Union[str, Path]) -> bool:
        """
        加载体数据文件或 DICOM 目录。
        仅在整个流程成功后替换当前体数据；失败时保留原数据并发出 error_changed。
        """
        try:
            volume = load_volume(path)
        except VolumeLoadError as e:
            message = f"加载失败：{e}"
            logger.warning(message)
            self._app_state.error_msg = message
            self.error_changed.emit(message)
            self.status_message.emit(message)
            return False

        self._app_state.publish(volume)
        self.error_changed.emit("")
        low, high = volume.intensity_range()
        self.status_message.emit(
            f"已加载：{volume.source}，RAS 形状 {volume.shape}，"
            f"间距 {tuple(round(s, 3) for s in volume.spacing)} mm，"
            f"灰度范围 [{low:.1f}, {high:.1f}]"
        )
        if volume.patient_info:
            self.patient_info_changed.emit()
        self.volume_loaded.emit()
        return True

    def load_dicom_directory(self, directory: Path) -> bool:
        """从 DICOM 目录加载，与 load_path 共用同一流程。"""
        return self.load_path(directory)

    def get_patient_info(self) -> Dict[str, str]:
        if self.volume is None:
            return {}
        return self.volume.patient_info

    # ---------- 命令：层号 ----------

    def set_slice_index(self, orientation: str, index: int) -> None:
        """设置某朝向的层号（截断到有效范围），并发出 slices_changed。"""
        if self.volume is None:
            return
        axis = ORIENTATION_AXIS[orientation]
        index = int(np.clip(index, 0, self.volume.shape[axis] - 1))
        if index == self._app_state.get_index(axis):
            return
        self._app_state.set_index(axis, index)
        self.slices_changed.emit()

    def set_slice_mm(self, orientation: str, mm: float) -> None:
        """滑条以显示坐标 (mm) 给出位置，换算为最近层号。"""
        if self.volume is None:
            return
        axis = ORIENTATION_AXIS[orientation]
        self.set_slice_index(orientation, self.volume.mm_to_voxel(axis, mm))

    def scroll(self, orientation: str, delta: float) -> None:
        """
        累计滚轮量，每满 wheel_step 切换一层；向上滚动层号增加。
        剩余不足一步的量保留到下一次滚动。
        """
        if self.volume is None:
            return
        axis = ORIENTATION_AXIS[orientation]
        step = self._config.wheel_step
        last = self.volume.shape[axis] - 1
        accum = self._app_state.scroll_accum[axis] + delta
        index = self._app_state.get_index(axis)
        while accum >= step:
            accum -= step
            index = min(index + 1, last)
        while accum <= -step:
            accum += step
            index = max(index - 1, 0)
        self._app_state.scroll_accum[axis] = accum
        self.set_slice_index(orientation, index)

    # ---------- 供 View 获取展示数据 ----------

    def get_slice_index(self, orientation: str) -> int:
        return self._app_state.get_index(ORIENTATION_AXIS[orientation])

    def get_slice_index_range(self, orientation: str) -> Tuple[int, int]:
        """返回某朝向的层索引范围 (min_index, max_index)，无数据时 (0, 0)。"""
        if self.volume is None:
            return 0, 0
        return 0, self.volume.shape[ORIENTATION_AXIS[orientation]] - 1

    def get_slice_mm(self, orientation: str) -> float:
        if self.volume is None:
            return 0.0
        axis = ORIENTATION_AXIS[orientation]
        return self.volume.voxel_to_mm(axis, self._app_state.get_index(axis))

    def get_mm_range(self, orientation: str) -> Tuple[float, float]:
        if self.volume is None:
            return 0.0, 0.0
        return self.volume.mm_range(ORIENTATION_AXIS[orientation])

    def get_mm_step(self, orientation: str) -> float:
        """滑条步长：该轴体素间距。"""
        if self.volume is None:
            return 1.0
        return float(self.volume.spacing[ORIENTATION_AXIS[orientation]])

    def get_slice_label(self, orientation: str) -> str:
        """如 "轴状位  Z = 12.0 mm"。"""
        title, letter = _TITLES[orientation]
        if self.volume is None:
            return title
        return f"{title}  {letter} = {self.get_slice_mm(orientation):.1f} mm"

    def get_slices(self) -> Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]]:
        """(sagittal, coronal, axial)，未加载时为 None。"""
        if self.volume is None:
            return None
        state = self._app_state
        return extract_slices(self.volume.array, state.slice_x, state.slice_y, state.slice_z)

    def get_display_plane(self, orientation: str) -> Optional[np.ndarray]:
        """按朝向取当前切面，做显示变换并拉伸到 uint8，形状为 (高, 宽)。"""
        slices = self.get_slices()
        if slices is None:
            return None
        plane = slices[ORIENTATION_AXIS[orientation]]
        return normalize_to_uint8(to_display_orientation(plane))

    def get_display_size(
        self, orientation: str, max_w: float, max_h: float
    ) -> Tuple[float, float]:
        """按物理长宽比在 (max_w, max_h) 内适配的显示尺寸。"""
        if self.volume is None:
            return 0.0, 0.0
        w_axis, h_axis = _PLANE_AXES[orientation]
        shape = self.volume.shape
        spacing = self.volume.spacing
        return fit_size(
            shape[w_axis], shape[h_axis], spacing[w_axis], spacing[h_axis], max_w, max_h
        )

    def get_slice_display_image(self, orientation: str) -> Optional[QImage]:
        """
        生成当前层的灰度 QImage（RGB32），无数据时返回 None。
        QImage 不持有 numpy 缓冲区，convertToFormat 会复制一份像素。
        """
        plane = self.get_display_plane(orientation)
        if plane is None:
            return None
        h_img, w_img = plane.shape
        return QImage(
            plane.data,
            w_img,
            h_img,
            w_img,
            QImage.Format_Grayscale8,
        ).convertToFormat(QImage.Format_RGB32)
