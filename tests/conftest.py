# -*- coding: utf-8 -*-
import numpy as np
import pytest
import SimpleITK as sitk
from PySide6.QtCore import QCoreApplication


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture
def write_scan(tmp_path):
    """用 SimpleITK 写出一个带几何信息的临时 NIfTI 文件，返回 (路径, ITK 图像)。"""

    def _write(
        array_zyx,
        spacing=(1.0, 1.0, 1.0),
        origin=(0.0, 0.0, 0.0),
        direction=None,
        name="scan.nii.gz",
    ):
        image = sitk.GetImageFromArray(np.asarray(array_zyx, dtype=np.float32))
        image.SetSpacing(spacing)
        image.SetOrigin(origin)
        if direction is not None:
            image.SetDirection(direction)
        path = tmp_path / name
        sitk.WriteImage(image, str(path))
        return path, image

    return _write


