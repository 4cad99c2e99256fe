# -*- coding: utf-8 -*-
"""
主窗口（View）。
仅负责布局、菜单、错误提示与 ViewModel 的绑定；
业务逻辑与数据均由 ViewModel 提供。
"""

from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QFileDialog,
    QGridLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from views.slice_view import SliceView

if TYPE_CHECKING:
    from viewmodels.main_view_model import MainViewModel


# 黑底主题 QSS
STYLESHEET = """
QMainWindow { background-color: #000000; color: #E0E0E0; }
QWidget#center { background-color: #000000; }
QLabel { color: #E0E0E0; }
QFrame { background-color: #000000; border: none; }
QSlider::groove:horizontal { background: #303040; height: 6px; }
QSlider::handle:horizontal { background: #3A86FF; width: 12px; border-radius: 6px; }
"""


class MainWindow(QMainWindow):
    """
    主窗口 View。
    - 顶部菜单与红色错误提示行
    - 中间 2x2 网格：左上轴状位、右上留空、左下冠状位、右下矢状位
    """

    def __init__(self, view_model: "MainViewModel", parent=None):
        super().__init__(parent)
        self._view_model = view_model
        config = view_model.config
        self.setWindowTitle(config.window_title)
        self.resize(*config.window_size)
        self.setStyleSheet(STYLESHEET)

        self._create_menu()

        central = QWidget(self)
        central.setObjectName("center")
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._error_label = QLabel()
        self._error_label.setStyleSheet("color: #FF4040; padding: 2px 6px;")
        self._error_label.hide()
        layout.addWidget(self._error_label)

        self._axial_view = SliceView("axial", view_model)
        self._coronal_view = SliceView("coronal", view_model)
        self._sagittal_view = SliceView("sagittal", view_model)
        grid = QGridLayout()
        grid.setContentsMargins(0, 0, 0, 0)
        grid.setSpacing(4)
        for i in range(2):
            grid.setRowStretch(i, 1)
            grid.setColumnStretch(i, 1)
        grid.addWidget(self._axial_view, 0, 0)
        grid.addWidget(QWidget(), 0, 1)
        grid.addWidget(self._coronal_view, 1, 0)
        grid.addWidget(self._sagittal_view, 1, 1)
        layout.addLayout(grid, 1)

        status = QStatusBar()
        status.setStyleSheet("color: #E0E0E0; background-color: #151521;")
        self.setStatusBar(status)
        self.statusBar().showMessage("就绪")

        # 绑定 ViewModel 信号
        self._view_model.volume_loaded.connect(self._on_volume_loaded)
        self._view_model.slices_changed.connect(self._refresh_views)
        self._view_model.error_changed.connect(self._on_error_changed)
        self._view_model.patient_info_changed.connect(self._on_patient_info_changed)
        self._view_model.status_message.connect(self.statusBar().showMessage)

    @property
    def slice_views(self):
        return self._axial_view, self._coronal_view, self._sagittal_view

    def _create_menu(self) -> None:
        """构建顶部菜单栏。"""
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("文件")
        open_action = QAction("打开体数据文件…", self)
        open_action.triggered.connect(self._on_open_file)
        file_menu.addAction(open_action)
        open_dicom_action = QAction("打开 DICOM 目录…", self)
        open_dicom_action.triggered.connect(self._on_open_dicom)
        file_menu.addAction(open_dicom_action)
        exit_action = QAction("退出", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        help_menu = menu_bar.addMenu("帮助")
        about_action = QAction("关于", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

    # ---------- 菜单槽 ----------

    def _on_open_file(self) -> None:
        """菜单「打开体数据文件」：选文件后交给 ViewModel 加载。"""
        file_path, _ = QFileDialog.getOpenFileName(
            self, "选择体数据文件", "", self._view_model.config.file_filter
        )
        if not file_path:
            return
        if not self._view_model.load_path(Path(file_path)):
            QMessageBox.critical(self, "错误", self._view_model.app_state.error_msg or "加载失败。")

    def _on_open_dicom(self) -> None:
        """菜单「打开 DICOM 目录」：选目录后交给 ViewModel 加载。"""
        dir_path = QFileDialog.getExistingDirectory(self, "选择 DICOM 目录")
        if not dir_path:
            return
        if not self._view_model.load_dicom_directory(Path(dir_path)):
            QMessageBox.critical(self, "错误", self._view_model.app_state.error_msg or "加载失败。")

    def _show_about(self) -> None:
        QMessageBox.information(
            self, "关于",
            "NIfTI 三视图浏览器\n\n按头信息仿射将体数据重排为 RAS，"
            "显示轴状位 / 冠状位 / 矢状位，坐标采用 LPS 约定。\n采用 MVVM 架构。",
        )

    # ---------- ViewModel 信号槽 ----------

    def _on_volume_loaded(self) -> None:
        """体数据加载完成：三视图重建滑条并刷新。"""
        for view in self.slice_views:
            view.set_volume_loaded()

    def _refresh_views(self) -> None:
        for view in self.slice_views:
            view.refresh_display()

    def _on_error_changed(self, message: str) -> None:
        self._error_label.setText(message)
        self._error_label.setVisible(bool(message))

    def _on_patient_info_changed(self) -> None:
        info = self._view_model.get_patient_info()
        self.setWindowTitle(
            f"{self._view_model.config.window_title} - "
            f"{info.get('name', '-')} ({info.get('patient_id', '-')}, {info.get('modality', '-')})"
        )
