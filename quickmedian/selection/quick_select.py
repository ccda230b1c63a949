"""快速选择 (QuickSelect) 算法实现。"""
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import MutableSequence, Optional, Sequence

from ..base import Algorithm
from ..errors import InvalidArgumentError
from ..utils import check_range, contains_nan, swap

logger = logging.getLogger(__name__)


class PivotMethod(Enum):
    """基准值 (pivot) 选取策略。

    - FIXED: 总是选择当前子区间的中点
    - RANDOM: 在当前子区间内均匀随机选择
    - MEDIAN_OF_THREE_FIXED: 取约 25%、50%、75% 位置三个值的中位数
    - MEDIAN_OF_THREE_RANDOM: 取三个随机位置的值的中位数

    三数取中策略在子区间长度小于阈值时退化为对应的简单策略。
    """
    FIXED = "fixed"
    RANDOM = "random"
    MEDIAN_OF_THREE_FIXED = "median_of_three_fixed"
    MEDIAN_OF_THREE_RANDOM = "median_of_three_random"

    @property
    def is_random(self) -> bool:
        return self in (PivotMethod.RANDOM, PivotMethod.MEDIAN_OF_THREE_RANDOM)

    @property
    def is_median_of_three(self) -> bool:
        return self in (PivotMethod.MEDIAN_OF_THREE_FIXED, PivotMethod.MEDIAN_OF_THREE_RANDOM)


class SortOrder(Enum):
    """排序方向，决定哪些元素被移动到选定位置之前。"""
    DESCENDING = "descending"
    ASCENDING = "ascending"


# 随机三数取中对构造出来的"性能杀手"数组最稳健
DEFAULT_PIVOT_METHOD = PivotMethod.MEDIAN_OF_THREE_RANDOM
DEFAULT_SORT_ORDER = SortOrder.DESCENDING
DEFAULT_MEDIAN_OF_THREE_THRESHOLD = 24


@dataclass(frozen=True)
class SelectionBounds:
    """一次选择过程中遇到的、离目标下标最近的已就位分区点。

    before 是目标左侧最近的已就位下标，after 是右侧最近的已就位下标；
    None 表示该方向从未被分区点界定过。
    """
    before: Optional[int] = None
    after: Optional[int] = None


class QuickSelect(Algorithm):
    """使用快速选择算法对序列进行部分排序。

    给定序列 X 和下标 k，原地重排 X 使得 X[k] == sorted(X)[k]，
    并且 k 之前的元素都不差于 X[k]，k 之后的元素都不优于 X[k]
    (按照排序方向比较)。除此之外不保证任何顺序。

    降序时较大的值排在 k 之前；升序时较小的值排在 k 之前。
    例如 select(X, N - 1) 会把降序下最大的 N 个值放在序列开头，但不保证它们的顺序。

    时间复杂度:
        - 平均情况: O(n)
        - 最坏情况: O(n^2) - 基准值序列恰好最差时
    空间复杂度: O(1) - 原地操作

    注意:
        序列中不能包含 NaN，否则行为未定义。可以先调用
        contains_special_value 进行检查。
    """

    def __init__(
        self,
        order: SortOrder = DEFAULT_SORT_ORDER,
        pivot_method: PivotMethod = DEFAULT_PIVOT_METHOD,
        rng: Optional[random.Random] = None,
        median_of_three_threshold: int = DEFAULT_MEDIAN_OF_THREE_THRESHOLD,
    ) -> None:
        """
        初始化快速选择

        Args:
            order: 排序方向，默认降序
            pivot_method: 基准值选取策略
            rng: 随机策略使用的随机数生成器；为 None 且策略需要随机数时自动创建
            median_of_three_threshold: 子区间长度不小于该值时才使用三数取中
        """
        if median_of_three_threshold < 1:
            raise InvalidArgumentError(
                f"三数取中阈值必须为正整数: {median_of_three_threshold}"
            )
        self.order = order
        self.pivot_method = pivot_method
        self.median_of_three_threshold = median_of_three_threshold
        if rng is None and pivot_method.is_random:
            rng = random.Random()
        self.rng = rng

    @property
    def descending(self) -> bool:
        return self.order is SortOrder.DESCENDING

    def execute(self, values: MutableSequence[float], k: int,
                begin: int = 0, end: Optional[int] = None) -> SelectionBounds:
        """对 values[begin:end] 执行快速选择，返回分区边界。"""
        if end is None:
            if values is None:
                raise InvalidArgumentError("序列不能为 None")
            end = len(values)
        return self.select_range(values, k, begin, end)

    def select(self, values: MutableSequence[float], k: int) -> None:
        """在整个序列上执行快速选择，丢弃分区边界。

        参数:
            values: 将被原地重排的序列
            k: 目标排序位置
        """
        if values is None:
            raise InvalidArgumentError("序列不能为 None")
        self.select_range(values, k, 0, len(values))

    def select_range(self, values: MutableSequence[float], k: int,
                     begin: int, end: int) -> SelectionBounds:
        """在半开区间 [begin, end) 内执行快速选择。

        参数:
            values: 将被原地重排的序列，区间外的元素保持不变
            k: 目标排序位置，是整个序列中的下标而不是区间内的偏移
            begin: 区间起始下标 (包含)
            end: 区间结束下标 (不包含)

        返回:
            SelectionBounds: 目标两侧最近的已就位分区点。
            降序时有 sorted(values)[before] >= values[k] >= sorted(values)[after]

        异常:
            InvalidArgumentError: 在修改序列之前，发现区间或下标无效
        """
        check_range(values, begin, end)
        if k < begin or k >= end:
            raise InvalidArgumentError(f"目标下标 {k} 不在区间 [{begin}, {end}) 内")

        before: Optional[int] = None
        after: Optional[int] = None
        descending = self.descending

        last = end - 1  # 当前子区间的最后一个下标 (包含)
        steps = 0
        while True:
            steps += 1
            pivot_idx = self._pivot_index(values, begin, last - begin + 1)
            pivot = values[pivot_idx]

            # "换出"基准值：基准值已保存在局部变量中，用最后一个元素覆盖其位置
            values[pivot_idx] = values[last]

            # 将应排在基准值之前的元素依次移动到子区间开头
            insert_idx = begin
            for i in range(begin, last):
                value = values[i]
                if (value >= pivot) if descending else (value <= pivot):
                    swap(values, i, insert_idx)
                    insert_idx += 1

            # 把基准值放回它的最终位置
            values[last] = values[insert_idx]
            values[insert_idx] = pivot

            if insert_idx < k:
                begin = insert_idx + 1  # 基准值在目标左侧：继续处理右半部分
                before = insert_idx
            elif insert_idx > k:
                last = insert_idx - 1  # 基准值在目标右侧：继续处理左半部分
                after = insert_idx
            else:
                break

        logger.debug("快速选择完成: k=%d, 分区次数=%d, 边界=(%s, %s)", k, steps, before, after)
        return SelectionBounds(before, after)

    def contains_special_value(self, values: Sequence[float],
                               begin: int = 0, end: Optional[int] = None) -> bool:
        """判断 values[begin:end] 中是否存在 NaN，可作为调用 select 前的检查。

        异常:
            InvalidArgumentError: 序列为 None 或区间无效
        """
        if values is None:
            raise InvalidArgumentError("序列不能为 None")
        if end is None:
            end = len(values)
        return contains_nan(values, begin, end)

    def _pivot_index(self, values: Sequence[float], begin: int, length: int) -> int:
        """按照配置的策略为长度为 length 的子区间选取基准值下标。"""
        method = self.pivot_method
        median_of_three = method.is_median_of_three and length >= self.median_of_three_threshold
        if method.is_random:
            if median_of_three:
                rng = self.rng
                return self._median_index(
                    values,
                    begin + rng.randrange(length),
                    begin + rng.randrange(length),
                    begin + rng.randrange(length),
                )
            return begin + self.rng.randrange(length)
        if median_of_three:
            # 取大约 0.25、0.5、0.75 位置的元素
            return self._median_index(
                values,
                begin + (length >> 2),
                begin + (length >> 1),
                begin + ((3 * length) >> 2),
            )
        return begin + (length >> 1)

    @staticmethod
    def _median_index(values: Sequence[float], i1: int, i2: int, i3: int) -> int:
        """返回三个候选下标中，值为中位数的那个下标。"""
        if values[i1] <= values[i2]:
            if values[i3] >= values[i2]:
                return i2
            elif values[i1] >= values[i3]:
                return i1
            else:
                return i3
        else:
            if values[i2] >= values[i3]:
                return i2
            elif values[i3] >= values[i1]:
                return i1
            else:
                return i3
