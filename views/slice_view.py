# -*- coding: utf-8 -*-
"""
单个正交切片视图（View）。
仅负责展示与交互：标题显示当前位置 (mm)、滚轮切层、底部滑条按 mm 定位；
数据与坐标换算均由 ViewModel 提供。
"""

from typing import TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap, QResizeEvent, QWheelEvent
from PySide6.QtWidgets import QFrame, QLabel, QSizePolicy, QSlider, QVBoxLayout

if TYPE_CHECKING:
    from viewmodels.main_view_model import MainViewModel


# 标题与边框颜色：轴状位黄、冠状位绿、矢状位红
_COLORS = {"axial": "#FFFF00", "coronal": "#00FF00", "sagittal": "#FF0000"}


class SliceView(QFrame):
    """
    单个 2D 切片视图（轴状位/冠状位/矢状位）。
    - 通过 ViewModel 获取显示用 QImage，按物理长宽比缩放后居中显示
    - 滚轮：交给 ViewModel 累计并换算层号
    - 滑条：以体素间距为步长的 mm 位置，交给 ViewModel 反算层号
    """

    def __init__(self, orientation: str, view_model: "MainViewModel", parent=None):
        super().__init__(parent)
        self.setFrameShape(QFrame.StyledPanel)
        self.setObjectName(f"SliceView-{orientation}")

        self._orientation = orientation
        self._view_model = view_model
        color = _COLORS[orientation]

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._title_label = QLabel(view_model.get_slice_label(orientation))
        self._title_label.setStyleSheet(
            f"color: {color}; background-color: rgba(0, 0, 0, 160); padding: 3px 6px;"
        )
        layout.addWidget(self._title_label)

        self._image_label = QLabel()
        self._image_label.setAlignment(Qt.AlignCenter)
        self._image_label.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        layout.addWidget(self._image_label, 1)

        self._slider = QSlider(Qt.Horizontal)
        self._slider.setEnabled(False)
        self._slider.valueChanged.connect(self._on_slider_changed)
        layout.addWidget(self._slider)

    @property
    def orientation(self) -> str:
        return self._orientation

    def set_volume_loaded(self) -> None:
        """体数据加载后由 MainWindow 调用：按 mm 范围与间距重建滑条并刷新。"""
        low, high = self._view_model.get_mm_range(self._orientation)
        step = self._view_model.get_mm_step(self._orientation)
        self._slider.blockSignals(True)
        self._slider.setRange(0, int(round((high - low) / step)))
        self._slider.setEnabled(True)
        self._slider.blockSignals(False)
        self.refresh_display()

    def refresh_display(self) -> None:
        """从 ViewModel 获取当前层的展示图、标题与滑条位置。"""
        self._title_label.setText(self._view_model.get_slice_label(self._orientation))
        if self._view_model.volume is None:
            self._image_label.clear()
            self._image_label.setText("未加载数据。\n请使用 文件 > 打开 加载体数据。")
            return

        low, _ = self._view_model.get_mm_range(self._orientation)
        step = self._view_model.get_mm_step(self._orientation)
        position = int(round((self._view_model.get_slice_mm(self._orientation) - low) / step))
        self._slider.blockSignals(True)
        self._slider.setValue(position)
        self._slider.blockSignals(False)

        qimg = self._view_model.get_slice_display_image(self._orientation)
        if qimg is None:
            return
        w, h = self._view_model.get_display_size(
            self._orientation,
            max(self._image_label.width(), 1),
            max(self._image_label.height(), 1),
        )
        pixmap = QPixmap.fromImage(qimg).scaled(
            max(int(w), 1), max(int(h), 1), Qt.IgnoreAspectRatio, Qt.SmoothTransformation
        )
        self._image_label.setPixmap(pixmap)

    def _on_slider_changed(self, position: int) -> None:
        low, _ = self._view_model.get_mm_range(self._orientation)
        step = self._view_model.get_mm_step(self._orientation)
        self._view_model.set_slice_mm(self._orientation, low + position * step)

    def wheelEvent(self, event: QWheelEvent) -> None:
        """滚轮：交给 ViewModel 累计，满一步切换一层。"""
        if self._view_model.volume is None:
            return
        self._view_model.scroll(self._orientation, event.angleDelta().y())
        event.accept()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        if self._view_model.volume is not None:
            self.refresh_display()
