"""算法的通用辅助函数。

本模块提供了选择算法中常用的工具函数，
包括元素交换、区间校验以及非数值 (NaN) 检测。
"""
import math
from typing import Any, MutableSequence, Sequence

import numpy as np

from .errors import InvalidArgumentError


def swap(items: MutableSequence[Any], i: int, j: int) -> None:
    """在序列中原地交换两个元素的位置。

    参数:
        items: 要操作的可变序列 (list 或一维 numpy 数组)
        i: 第一个元素的索引
        j: 第二个元素的索引

    示例:
        >>> arr = [1.0, 2.0, 3.0]
        >>> swap(arr, 0, 2)
        >>> arr
        [3.0, 2.0, 1.0]
    """
    items[i], items[j] = items[j], items[i]


def check_range(values: Sequence[float], begin: int, end: int) -> None:
    """校验半开区间 [begin, end) 是序列中的非空有效区间。

    异常:
        InvalidArgumentError: 序列为 None、区间为空或超出序列范围
    """
    if values is None:
        raise InvalidArgumentError("序列不能为 None")
    if begin < 0 or end > len(values) or begin >= end:
        raise InvalidArgumentError(
            f"无效区间 [{begin}, {end})，序列长度为 {len(values)}"
        )


def contains_nan(values: Sequence[float], begin: int, end: int) -> bool:
    """判断区间 [begin, end) 内是否存在 NaN 值，不修改序列。

    对 numpy 数组使用向量化的 np.isnan，其余序列逐个检查。

    异常:
        InvalidArgumentError: 区间无效
    """
    check_range(values, begin, end)
    if isinstance(values, np.ndarray):
        return bool(np.isnan(values[begin:end]).any())
    for i in range(begin, end):
        if math.isnan(values[i]):
            return True
    return False
