"""
错误类型

两类错误, 都在构造/调用边界处立即失败, 不进入逐步计算的热循环:
- ConfigurationError: 未知预设名、缺失必需属性、非法参数、非法节点索引
- NumericPreconditionError: dt 非正或非有限、步数为负

两者都继承 ValueError, 调用方可以按 ValueError 统一捕获。
"""


class SpikenetError(Exception):
    """spikenet 所有错误的基类"""


class ConfigurationError(SpikenetError, ValueError):
    """构造期配置错误

    Attributes:
        field: 出错的字段/属性名 (可为 None)
    """

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class NumericPreconditionError(SpikenetError, ValueError):
    """数值前置条件违反 (如 dt <= 0)"""
