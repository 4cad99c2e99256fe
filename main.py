# -*- coding: utf-8 -*-
"""
程序入口：配置日志，创建 ViewModel 与主窗口，可选地在启动时打开一个体数据。
"""

import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication

from models import ViewerConfig
from viewmodels import MainViewModel
from views import MainWindow


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="NIfTI 三视图浏览器（RAS 重排）")
    parser.add_argument("path", nargs="?", help="启动时打开的体数据文件或 DICOM 目录")
    parser.add_argument("--log-level", default=None, help="日志级别，如 DEBUG / INFO")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    config = ViewerConfig.from_env()
    logging.basicConfig(
        level=(args.log_level or config.log_level).upper(),
        format=config.log_format,
    )

    app = QApplication(sys.argv[:1])
    view_model = MainViewModel(config)
    window = MainWindow(view_model)
    window.show()
    if args.path:
        view_model.load_path(args.path)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
