"""基于快速选择的中位数算法实现。"""
import logging
import math
from typing import MutableSequence, Optional

from ..base import Algorithm
from ..errors import InvalidArgumentError
from ..selection.quick_select import QuickSelect

logger = logging.getLogger(__name__)


def average(x: float, y: float) -> float:
    """计算两个数的平均值，避免 x + y 溢出。

    在直接计算 (x + y) / 2 不会溢出时，结果与其逐位相同。

    参数:
        x: 第一个值，不能为 NaN
        y: 第二个值，不能为 NaN

    返回:
        float: 两个值的平均值

    示例:
        >>> average(3.0, 11.0)
        7.0
        >>> import sys
        >>> average(sys.float_info.max, sys.float_info.max) == sys.float_info.max
        True
    """
    if math.isinf(x) or math.isinf(y):
        # 含无穷时加法结果总是 +/-inf 或 NaN，不存在溢出问题
        return (x + y) / 2.0

    if x >= y:
        if y <= 0 <= x:
            # 异号 (或含零) 时求和不会溢出
            return (x + y) / 2.0
        # 同号时差值的绝对值小于任一操作数，不会溢出
        return ((x - y) / 2.0) + y
    if x <= 0 <= y:
        return (x + y) / 2.0
    return ((y - x) / 2.0) + x


class QuickMedian(Algorithm):
    """使用快速选择在期望 O(n) 时间内求中位数。

    奇数长度时中位数是中间位置的值；偶数长度时是两个中间值的平均值。
    偶数长度时，第一次选择返回的分区边界可以让第二次选择只在
    必然包含另一个中间值的较小区间内进行，避免再次扫描整个序列。

    注意:
        会原地重排输入序列 (值的多重集合保持不变)。
        序列中包含 NaN 时行为未定义。
    """

    def __init__(self, selector: Optional[QuickSelect] = None) -> None:
        """
        Args:
            selector: 用于选出中间元素的 QuickSelect，默认使用默认配置
        """
        self.selector = selector if selector is not None else QuickSelect()

    average = staticmethod(average)

    def execute(self, values: MutableSequence[float]) -> float:
        return self.median(values)

    def median(self, values: MutableSequence[float]) -> float:
        """返回序列的中位数。

        参数:
            values: 非空序列，可能被原地重排

        返回:
            float: 中位数

        异常:
            InvalidArgumentError: 序列为 None 或为空
        """
        if values is None or len(values) == 0:
            raise InvalidArgumentError("求中位数的序列不能为空")

        n = len(values)
        if n == 1:
            return float(values[0])
        if n == 2:
            return average(float(values[0]), float(values[1]))

        middle_idx = n >> 1
        if n & 1:
            self.selector.select(values, middle_idx)
            return float(values[middle_idx])

        high_idx = middle_idx
        low_idx = high_idx - 1
        bounds = self.selector.select_range(values, high_idx, 0, n)
        high_value = float(values[high_idx])

        if bounds.before == low_idx:
            logger.debug("中位数: 低位中间元素已被第一次选择固定 (n=%d)", n)
        else:
            # 低位中间元素必然位于上一个已就位分区点与 high_idx 之间
            begin = 0 if bounds.before is None else bounds.before + 1
            logger.debug("中位数: 在区间 [%d, %d) 内进行第二次选择 (n=%d)", begin, high_idx, n)
            self.selector.select_range(values, low_idx, begin, high_idx)

        return average(float(values[low_idx]), high_value)
