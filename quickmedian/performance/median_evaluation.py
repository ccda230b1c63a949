"""
中位数算法评估系统

在不同的数组大小、重复元素、预排序程度和基准值策略下，
对比 QuickMedian 与基于排序的参照实现，校验结果逐位一致并累计耗时。
"""

import json
import random
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from ..errors import InvalidArgumentError
from ..logging_config import get_logger
from ..selection.quick_select import PivotMethod, QuickSelect
from ..statistics.quick_median import QuickMedian
from ..statistics.sorting_median import SortingMedian


class SortingCondition(Enum):
    """输入数据的预排序程度"""
    UNSORTED = "unsorted"
    SORTED = "sorted"
    MIDDLE_UNSORTED = "middle_unsorted"
    REVERSE_SORTED = "reverse_sorted"
    REVERSE_MIDDLE_UNSORTED = "reverse_middle_unsorted"


@dataclass(frozen=True)
class EvaluationCondition:
    """一组评估条件"""
    size: int
    duplicate: bool
    sorting: SortingCondition
    pivot_method: PivotMethod

    def __str__(self) -> str:
        return "\t".join([str(self.size), str(self.duplicate), self.sorting.value, self.pivot_method.value])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "duplicate": self.duplicate,
            "sorting": self.sorting.value,
            "pivot_method": self.pivot_method.value,
        }


@dataclass
class EvaluationConfig:
    """评估配置"""
    sizes: List[int] = field(default_factory=lambda: [100, 101, 1000, 1001, 10000, 10001])
    pivot_methods: List[PivotMethod] = field(default_factory=lambda: list(PivotMethod))
    duplicates: List[bool] = field(default_factory=lambda: [True, False])
    sortings: List[SortingCondition] = field(default_factory=lambda: list(SortingCondition))
    trials: int = 10
    elements_per_condition: int = 100_000  # 每个条件每轮处理的元素总数，数组太少时计时不准
    data_seed: int = 42
    selector_seed: int = 43

    def __post_init__(self):
        if not self.sizes or any(size < 1 for size in self.sizes):
            raise InvalidArgumentError(f"数组大小必须为正整数: {self.sizes}")
        if self.trials < 1:
            raise InvalidArgumentError(f"评估轮数必须为正整数: {self.trials}")

    def conditions(self) -> List[EvaluationCondition]:
        """展开所有条件组合"""
        return [
            EvaluationCondition(size, duplicate, sorting, pivot_method)
            for size in self.sizes
            for duplicate in self.duplicates
            for sorting in self.sortings
            for pivot_method in self.pivot_methods
        ]


@dataclass
class ConditionTiming:
    """单个条件的累计耗时（秒）"""
    condition: EvaluationCondition
    quick_median_time: float = 0.0
    sorting_median_time: float = 0.0
    array_count: int = 0

    @property
    def speedup(self) -> Optional[float]:
        if self.quick_median_time <= 0:
            return None
        return self.sorting_median_time / self.quick_median_time


@dataclass
class MedianMismatch:
    """QuickMedian 与参照实现结果不一致的记录"""
    condition: EvaluationCondition
    quick_median: float
    sorting_median: float


@dataclass
class EvaluationReport:
    """评估结果"""
    config: EvaluationConfig
    start_time: str = field(default_factory=lambda: datetime.now().isoformat())
    end_time: Optional[str] = None
    timings: Dict[EvaluationCondition, ConditionTiming] = field(default_factory=dict)
    mismatches: List[MedianMismatch] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.mismatches

    def record(self, condition: EvaluationCondition, quick_time: float,
               sorting_time: float, array_count: int) -> None:
        timing = self.timings.setdefault(condition, ConditionTiming(condition))
        timing.quick_median_time += quick_time
        timing.sorting_median_time += sorting_time
        timing.array_count += array_count

    def summary(self) -> Dict[str, Any]:
        """获取汇总信息"""
        rows = []
        for timing in self.timings.values():
            row = timing.condition.to_dict()
            row.update({
                "array_count": timing.array_count,
                "quick_median_time": timing.quick_median_time,
                "sorting_median_time": timing.sorting_median_time,
                "speedup": timing.speedup,
            })
            rows.append(row)
        rows.sort(key=lambda r: (r["size"], r["duplicate"], r["sorting"], r["pivot_method"]))

        return {
            "start_time": self.start_time,
            "end_time": self.end_time,
            "trials": self.config.trials,
            "condition_count": len(rows),
            "passed": self.passed,
            "mismatches": [
                {
                    **m.condition.to_dict(),
                    "quick_median": m.quick_median,
                    "sorting_median": m.sorting_median,
                }
                for m in self.mismatches
            ],
            "conditions": rows,
        }

    def save(self, path: Union[str, Path]) -> Path:
        """将汇总信息保存为 JSON 文件"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.summary(), f, indent=2, ensure_ascii=False)
        return path


class DataGenerator:
    """测试数据生成器"""

    @staticmethod
    def int_array(size: int, duplicate: bool, rng: np.random.Generator) -> np.ndarray:
        """生成打乱顺序的整数值浮点数组。

        不含重复时为 0..size-1；含重复时由 0..size//2-1 和 0..size-size//2-1 两段组成。
        """
        if duplicate:
            half = size // 2
            values = np.concatenate([np.arange(half), np.arange(size - half)]).astype(np.float64)
        else:
            values = np.arange(size, dtype=np.float64)
        rng.shuffle(values)
        return values

    @staticmethod
    def apply_sorting(values: np.ndarray, sorting: SortingCondition) -> np.ndarray:
        """按照预排序条件原地调整数组"""
        n = len(values)
        head, tail = int(n * 0.45), int(n * 0.55)

        if sorting is SortingCondition.SORTED:
            values.sort()
        elif sorting is SortingCondition.MIDDLE_UNSORTED:
            values[:head].sort()
            values[tail:].sort()
        elif sorting is SortingCondition.REVERSE_SORTED:
            values[:] = np.sort(values)[::-1]
        elif sorting is SortingCondition.REVERSE_MIDDLE_UNSORTED:
            values[:head] = np.sort(values[:head])[::-1]
            values[tail:] = np.sort(values[tail:])[::-1]
        return values

    def generate(self, condition: EvaluationCondition, rng: np.random.Generator) -> List[float]:
        values = self.int_array(condition.size, condition.duplicate, rng)
        return self.apply_sorting(values, condition.sorting).tolist()


class MedianEvaluation:
    """
    中位数评估系统

    对每个条件生成若干数组，分别用 QuickMedian 和 SortingMedian 计算中位数，
    要求两者完全相等，并累计各自耗时。
    """

    def __init__(self, data_generator: Optional[DataGenerator] = None):
        self.logger = get_logger(__name__)
        self.data_generator = data_generator or DataGenerator()
        self.sorting_median = SortingMedian()

    def run(self, config: Optional[EvaluationConfig] = None) -> EvaluationReport:
        """
        运行评估

        Args:
            config: 评估配置，默认使用 EvaluationConfig()

        Returns:
            评估结果
        """
        config = config or EvaluationConfig()
        report = EvaluationReport(config=config)
        data_rng = np.random.default_rng(config.data_seed)
        order_rng = random.Random(config.data_seed)
        conditions = config.conditions()

        self.logger.info("evaluation_started", conditions=len(conditions), trials=config.trials)
        for trial in range(config.trials):
            order_rng.shuffle(conditions)
            for condition in conditions:
                self._evaluate_condition(condition, config, data_rng, report)
            self.logger.info("evaluation_trial_complete", trial=trial + 1, trials=config.trials)

        report.end_time = datetime.now().isoformat()
        self.logger.info("evaluation_complete", passed=report.passed, mismatches=len(report.mismatches))
        return report

    def _evaluate_condition(self, condition: EvaluationCondition, config: EvaluationConfig,
                            rng: np.random.Generator, report: EvaluationReport) -> None:
        array_count = max(1, config.elements_per_condition // condition.size)
        arrays = [self.data_generator.generate(condition, rng) for _ in range(array_count)]

        selector = QuickSelect(pivot_method=condition.pivot_method,
                               rng=random.Random(config.selector_seed))
        quick_median = QuickMedian(selector)

        quick_inputs = [list(values) for values in arrays]
        start_time = time.perf_counter()
        quick_results = [quick_median.median(values) for values in quick_inputs]
        quick_time = time.perf_counter() - start_time

        start_time = time.perf_counter()
        sorting_results = [self.sorting_median.execute(values) for values in arrays]
        sorting_time = time.perf_counter() - start_time

        report.record(condition, quick_time, sorting_time, array_count)
        self._check_results(condition, quick_results, sorting_results, report)

    def _check_results(self, condition: EvaluationCondition, quick_results: Sequence[float],
                       sorting_results: Sequence[float], report: EvaluationReport) -> None:
        for quick, expected in zip(quick_results, sorting_results):
            if quick != expected:
                report.mismatches.append(MedianMismatch(condition, quick, expected))
                self.logger.error(
                    "median_mismatch",
                    condition=str(condition),
                    quick_median=quick,
                    sorting_median=expected,
                )
