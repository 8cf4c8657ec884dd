"""Pomodoro RPG 异常体系

四类错误：非法状态流转、校验失败、持久化失败、存档版本不兼容。
全部可由调用方本地恢复（提示用户或回退到全新状态），不重试。
"""


class PomodoroRPGError(Exception):
    """Pomodoro RPG 基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 调用方是否可以本地恢复
        """
        super().__init__(message)
        self.recoverable = recoverable


class InvalidStateTransitionError(PomodoroRPGError):
    """非法状态流转（如 WORK 以外暂停、未暂停时恢复、重复开箱）"""

    def __init__(self, action: str, reason: str) -> None:
        """
        Args:
            action: 触发的动作名
            reason: 拒绝原因
        """
        super().__init__(f"Cannot {action}: {reason}")
        self.action = action
        self.reason = reason


class ChestAlreadyOpenedError(InvalidStateTransitionError):
    """宝箱已被打开过"""

    def __init__(self, chest_id: str) -> None:
        super().__init__("open chest", "Chest has already been opened")
        self.chest_id = chest_id


class TimerConfigValidationError(PomodoroRPGError):
    """计时器配置超出允许范围"""

    def __init__(self, errors: list[str]) -> None:
        """
        Args:
            errors: 各字段的校验错误信息
        """
        super().__init__("; ".join(errors))
        self.errors = errors


class UnknownTaskError(PomodoroRPGError):
    """未知任务类型"""

    def __init__(self, task_type: str) -> None:
        super().__init__(f"Unknown task type: {task_type}", recoverable=False)
        self.task_type = task_type


class PersistenceError(PomodoroRPGError):
    """存档读写失败（底层存储异常）"""

    def __init__(self, operation: str, original_error: Exception) -> None:
        """
        Args:
            operation: 失败的操作（save/load/clear）
            original_error: 原始异常
        """
        super().__init__(f"Failed to {operation} game state: {original_error}")
        self.operation = operation
        self.original_error = original_error


class SaveVersionError(PomodoroRPGError):
    """存档版本与当前版本不一致（不做迁移）"""

    def __init__(self, found: str, expected: str) -> None:
        super().__init__(f"Incompatible save version: {found} (current: {expected})")
        self.found = found
        self.expected = expected
