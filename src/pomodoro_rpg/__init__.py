"""Pomodoro RPG -- 番茄钟驱动的 RPG 游戏核心

专注（WORK）阶段执行任务、触发随机事件，休息阶段结算奖励、开箱、治疗。
"""

__version__ = "0.1.0"
