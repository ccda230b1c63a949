"""选择与中位数算法使用的异常类型。"""


class InvalidArgumentError(ValueError):
    """输入参数不满足前置条件。

    在修改任何数据之前抛出，例如序列为 None、区间为空或越界、
    目标下标不在区间内等情况。
    """
