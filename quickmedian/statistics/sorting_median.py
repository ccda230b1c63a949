"""基于完整排序的中位数算法实现。"""
from typing import MutableSequence

from ..base import Algorithm
from ..errors import InvalidArgumentError
from .quick_median import average


class SortingMedian(Algorithm):
    """通过原地排序求中位数。

    作为 QuickMedian 的可信参照实现，用于正确性校验和性能对比。

    时间复杂度: O(n log n)
    """

    def execute(self, values: MutableSequence[float]) -> float:
        """对序列原地排序并返回中位数。

        参数:
            values: 非空的 list 或一维 numpy 数组，会被原地排序

        返回:
            float: 中位数

        异常:
            InvalidArgumentError: 序列为 None 或为空
        """
        if values is None or len(values) == 0:
            raise InvalidArgumentError("求中位数的序列不能为空")

        values.sort()

        n = len(values)
        middle_idx = n >> 1
        if n & 1:
            return float(values[middle_idx])
        return average(float(values[middle_idx]), float(values[middle_idx - 1]))
