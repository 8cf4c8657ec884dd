"""随机事件系统：模板库、生成器、效果应用、任务会话集成"""

from .bank import EventBank, evaluate_conditions
from .effects import EventEffectApplier
from .generator import EventGenerator
from .integration import EventTaskIntegration

__all__ = [
    "EventBank",
    "evaluate_conditions",
    "EventGenerator",
    "EventEffectApplier",
    "EventTaskIntegration",
]
