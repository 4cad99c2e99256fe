# -*- coding: utf-8 -*-
import numpy as np


def encoded_volume(shape):
    """volume[i, j, k] = 100*i + 10*j + k，用于追踪重排后每个体素的来源。"""
    i, j, k = np.indices(shape)
    return (100 * i + 10 * j + k).astype(np.float32)


def decode(value):
    value = int(round(float(value)))
    return value // 100, (value // 10) % 10, value % 10
