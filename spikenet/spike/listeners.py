"""
Layer 0: Listeners — 脉冲事件回调注册表

每个 Node 拥有一个 Listeners。神经元发放时 (在 reset 之前) 同步调用
inform(), 按注册顺序逐个调用零参数回调, 每次发放每个回调恰好一次。

不变量:
  - 调用顺序 = 注册顺序 (FIFO)
  - 回调不会被自动移除
  - 回调抛出的异常直接向上传播, 不吞掉

异常发生时引擎已完成本步 Euler 更新但尚未执行发放重置 (v 仍 ≥ 阈值),
所在网络的出向突触未被激活, tick 也不前进。此时的网络状态是半更新的,
应当丢弃或调用 Network.reset() 后再继续仿真。
"""

from typing import Callable, Iterator, List


Listener = Callable[[], None]


class Listeners:
    """有序的零参数回调列表"""

    def __init__(self):
        self._listeners: List[Listener] = []

    def add(self, listener: Listener) -> None:
        """注册一个回调 (追加到末尾)"""
        if not callable(listener):
            raise TypeError(f"listener must be callable, got {listener!r}")
        self._listeners.append(listener)

    def remove(self, listener: Listener) -> None:
        """显式注销一个回调 (移除第一个匹配项)"""
        self._listeners.remove(listener)

    def inform(self) -> None:
        """按注册顺序调用全部回调"""
        for listener in self._listeners:
            listener()

    def clear(self) -> None:
        self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)

    def __iter__(self) -> Iterator[Listener]:
        return iter(self._listeners)

    def __repr__(self) -> str:
        return f"Listeners(count={len(self._listeners)})"
