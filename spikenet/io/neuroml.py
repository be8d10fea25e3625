"""
NeuroML 模型描述读取 (只取 Izhikevich 细胞参数)

从 NeuroML v2 文件中读取 <izhikevichCell> / <izhikevich> 元素,
转换成 NeuronParameters 记录, 供构造 NeuronEngine 使用。仿真期间不会再读文件。

    <izhikevichCell id="izTonic" v0="-70mV" thresh="30mV"
                    a="0.02" b="0.2" c="-65" d="6"/>

- 元素名与命名空间无关 (忽略 {namespace} 前缀)
- 数值可带单位后缀: "-70mV" → -70.0, "-0.07V" → -70.0
- 缺失必需属性或无法解析的数值 → ConfigurationError, 消息中带元素 id 与字段名
- <izhikevich2007Cell> 不是支持的模型变体, 记录 DEBUG 日志后跳过
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Dict, Union
from os import PathLike

from spikenet.errors import ConfigurationError
from spikenet.neuron.params import NeuronParameters


logger = logging.getLogger(__name__)


IZHIKEVICH_TAGS = ("izhikevichCell", "izhikevich")
UNSUPPORTED_TAGS = ("izhikevich2007Cell", "izhikevich2007")
REQUIRED_ATTRIBUTES = ("v0", "thresh", "a", "b", "c", "d")

_QUANTITY = re.compile(
    r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([A-Za-z_]*)\s*$")

# 电压单位换算到 mV
_VOLTAGE_SCALE = {"": 1.0, "mV": 1.0, "V": 1.0e3}


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_quantity(text: str, field: str, cell_id: str = "?") -> float:
    """解析带可选单位的数值, 电压单位统一换算成 mV"""
    match = _QUANTITY.match(text)
    if match is None:
        raise ConfigurationError(
            f"cell {cell_id!r}: cannot parse {field}={text!r}", field=field)
    value, unit = float(match.group(1)), match.group(2)
    if unit in _VOLTAGE_SCALE:
        return value * _VOLTAGE_SCALE[unit]
    # a/b/d 等量纲为 per_ms 之类的单位, 数值原样使用
    return value


def cell_to_parameters(element: ET.Element) -> NeuronParameters:
    """把一个 Izhikevich 元素转换成参数记录"""
    cell_id = element.get("id")
    if cell_id is None:
        raise ConfigurationError(
            f"<{_local_name(element.tag)}> element is missing required "
            f"attribute 'id'", field="id")

    values = {}
    for attr in REQUIRED_ATTRIBUTES:
        text = element.get(attr)
        if text is None:
            raise ConfigurationError(
                f"cell {cell_id!r} is missing required attribute {attr!r}",
                field=attr)
        values[attr] = parse_quantity(text, attr, cell_id)

    return NeuronParameters(
        a=values["a"], b=values["b"], c=values["c"], d=values["d"],
        v0=values["v0"], threshold=values["thresh"], name=cell_id,
    )


def load_izhikevich_cells(
    source: Union[str, PathLike],
) -> Dict[str, NeuronParameters]:
    """读取文件中的全部 Izhikevich 细胞

    Args:
        source: NeuroML 文件路径

    Returns:
        {cell_id: NeuronParameters}, 按文档顺序

    Raises:
        ConfigurationError: 缺失属性、数值无法解析或 id 重复
    """
    tree = ET.parse(source)
    root = tree.getroot()
    logger.info("loading NeuroML document %r from %s", root.get("id"), source)

    cells: Dict[str, NeuronParameters] = {}
    for element in root.iter():
        tag = _local_name(element.tag)
        if tag in IZHIKEVICH_TAGS:
            params = cell_to_parameters(element)
            if params.name in cells:
                raise ConfigurationError(
                    f"duplicate cell id {params.name!r}", field="id")
            cells[params.name] = params
            logger.debug("loaded cell %s: %r", params.name, params)
        elif tag in UNSUPPORTED_TAGS:
            logger.debug("skipping unsupported cell type <%s id=%r>",
                         tag, element.get("id"))

    logger.info("loaded %d Izhikevich cells", len(cells))
    return cells
