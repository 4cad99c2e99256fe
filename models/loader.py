# -*- coding: utf-8 -*-
"""
体数据加载（Model）。
- NIfTI 头信息（sform / qform / pixdim）由 nibabel 读取，体素由 SimpleITK 解码
- MHA / NRRD 单文件与 DICOM 序列目录无 NIfTI 方向字段，由 ITK 几何信息合成 sform
- 串联仿射提取与 RAS 重排，得到 RasVolume
任何一步失败都抛出 VolumeLoadError，调用方据此保留先前已加载的数据。
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

import nibabel as nib
import numpy as np
import pydicom
import SimpleITK as sitk
from nibabel.filebasedimages import ImageFileError
from nibabel.spatialimages import HeaderDataError
from nibabel.wrapstruct import WrapStructError
from pydicom.errors import InvalidDicomError

from .affine import extract_affine
from .errors import VolumeLoadError
from .header import NiftiHeader
from .ras_volume import RasVolume
from .reorient import reorient_to_ras

logger = logging.getLogger(__name__)

_NIFTI_SUFFIXES = (".nii", ".nii.gz")
# ITK 的 LPS 世界坐标 -> RAS：前两轴取反
_LPS_TO_RAS = np.diag([-1.0, -1.0, 1.0])


@dataclass
class DecodedScan:
    """解码后的原始数据：头信息 + 原始体素顺序 (i, j, k) 的 float32 数组。"""

    header: NiftiHeader
    data: np.ndarray
    source: Path
    patient_info: Dict[str, str] = field(default_factory=dict)


def _row(hdr, key: str, count: int):
    return tuple(float(v) for v in hdr[key][:count])


def header_from_nifti(hdr) -> NiftiHeader:
    """
    将 nibabel 的 Nifti1Header / Nifti2Header 整理为 NiftiHeader。
    pixdim[0] 保留原值，qfac 由 NiftiHeader 自行解释。
    """
    return NiftiHeader(
        sform_code=int(hdr["sform_code"]),
        qform_code=int(hdr["qform_code"]),
        srow_x=_row(hdr, "srow_x", 4),
        srow_y=_row(hdr, "srow_y", 4),
        srow_z=_row(hdr, "srow_z", 4),
        quatern_b=float(hdr["quatern_b"]),
        quatern_c=float(hdr["quatern_c"]),
        quatern_d=float(hdr["quatern_d"]),
        quatern_x=float(hdr["qoffset_x"]),
        quatern_y=float(hdr["qoffset_y"]),
        quatern_z=float(hdr["qoffset_z"]),
        pixdim=_row(hdr, "pixdim", 4),
    )


def read_nifti_header(path: Path) -> Optional[NiftiHeader]:
    """
    用 nibabel 读取 NIfTI 文件头；非 NIfTI 文件返回 None。
    头中声明的维度不是三维（包括只有一帧的四维数据）时抛出 VolumeLoadError。
    """
    if not path.name.lower().endswith(_NIFTI_SUFFIXES):
        return None
    image = nib.load(str(path))
    if not isinstance(image, (nib.Nifti1Image, nib.Nifti2Image)):
        return None
    if len(image.shape) != 3:
        raise VolumeLoadError(f"仅支持三维体数据，实际形状为 {image.shape}")
    return header_from_nifti(image.header)


def header_from_geometry(image: sitk.Image) -> NiftiHeader:
    """由 ITK 图像的 spacing/direction/origin (LPS) 合成等价的 RAS sform 头信息。"""
    spacing = np.array(image.GetSpacing(), dtype=np.float64)
    direction = np.array(image.GetDirection(), dtype=np.float64).reshape(3, 3)
    origin = np.array(image.GetOrigin(), dtype=np.float64)
    affine = _LPS_TO_RAS @ direction @ np.diag(spacing)
    translation = _LPS_TO_RAS @ origin
    rows = [tuple(float(v) for v in (*affine[r], translation[r])) for r in range(3)]
    return NiftiHeader(
        sform_code=1,
        srow_x=rows[0],
        srow_y=rows[1],
        srow_z=rows[2],
        pixdim=(1.0, float(spacing[0]), float(spacing[1]), float(spacing[2])),
    )


def array_in_voxel_order(image: sitk.Image) -> np.ndarray:
    """ITK 数组为 (k, j, i)，转为头信息所描述的 (i, j, k) 顺序的 float32。"""
    if image.GetDimension() != 3:
        raise VolumeLoadError(f"仅支持三维体数据，实际维度为 {image.GetDimension()}")
    if image.GetNumberOfComponentsPerPixel() != 1:
        raise VolumeLoadError("仅支持标量体数据，不支持多通道像素")
    array = sitk.GetArrayFromImage(image)
    return np.asarray(array.transpose(2, 1, 0), dtype=np.float32)


def _patient_info(ds: pydicom.Dataset) -> Dict[str, str]:
    def get_attr(name: str, default: str = "-") -> str:
        value = getattr(ds, name, default)
        return str(value) if value is not None else default

    return {
        "name": get_attr("PatientName", "-"),
        "patient_id": get_attr("PatientID", "-"),
        "study_date": get_attr("StudyDate", "-"),
        "modality": get_attr("Modality", "-"),
    }


def read_volume_file(path: Path) -> DecodedScan:
    """读取单个体数据文件（.nii / .nii.gz / .mha / .nrrd 等 SimpleITK 支持的格式）。"""
    header = read_nifti_header(path)
    image = sitk.ReadImage(str(path))
    if header is None:
        logger.debug("%s 不含 NIfTI 方向字段，使用 ITK 几何信息", path)
        header = header_from_geometry(image)
    return DecodedScan(header, array_in_voxel_order(image), path)


def read_dicom_series(directory: Path) -> DecodedScan:
    """读取目录下的 DICOM 序列，并用 pydicom 解析首个文件的患者信息。"""
    reader = sitk.ImageSeriesReader()
    reader.MetaDataDictionaryArrayUpdateOn()
    reader.LoadPrivateTagsOn()
    dicom_names = reader.GetGDCMSeriesFileNames(str(directory))
    if not dicom_names:
        raise VolumeLoadError("所选目录下未找到 DICOM 序列。")
    ds = pydicom.dcmread(dicom_names[0], stop_before_pixels=True)
    reader.SetFileNames(dicom_names)
    image = reader.Execute()
    return DecodedScan(
        header_from_geometry(image),
        array_in_voxel_order(image),
        directory,
        _patient_info(ds),
    )


def build_ras_volume(decoded: DecodedScan) -> RasVolume:
    """仿射提取 + RAS 重排。"""
    spacing = decoded.header.spacing
    if not all(np.isfinite(s) and s > 0 for s in spacing):
        raise VolumeLoadError(f"体素间距非法：{spacing}")
    direction, translation = extract_affine(decoded.header)
    logger.debug(
        "orientation source %s, direction=%s, translation=%s",
        decoded.header.orientation_source.value,
        direction.tolist(),
        translation.tolist(),
    )
    array, ras_spacing, ras_origin = reorient_to_ras(
        decoded.data, direction, translation, spacing
    )
    return RasVolume(
        array, ras_spacing, ras_origin, decoded.source, decoded.patient_info
    )


def load_volume(path: Union[str, Path]) -> RasVolume:
    """
    完整加载流程：目录按 DICOM 序列读取，文件按单文件读取。
    所有失败统一包装为 VolumeLoadError。
    """
    path = Path(path)
    if not path.exists():
        raise VolumeLoadError(f"路径不存在：{path}")
    try:
        if path.is_dir():
            decoded = read_dicom_series(path)
        else:
            decoded = read_volume_file(path)
        volume = build_ras_volume(decoded)
    except VolumeLoadError:
        raise
    except (
        RuntimeError,
        OSError,
        ValueError,
        InvalidDicomError,
        ImageFileError,
        HeaderDataError,
        WrapStructError,
    ) as e:
        raise VolumeLoadError(f"无法读取 {path}：{e}") from e

    logger.info(
        "loaded %s: shape=%s spacing=%s origin=%s",
        path, volume.shape, volume.spacing, volume.origin,
    )
    return volume
