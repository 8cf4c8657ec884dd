"""番茄钟状态机

阶段流转：IDLE -> WORK -> SHORT_BREAK -> WORK -> ... -> LONG_BREAK -> WORK。
所有状态变化都通过 dispatch(action) 同步完成；计时器本身不持有定时任务，
由 GameController 的循环每秒派发 TICK。
"""

import json
from collections.abc import Callable
from typing import Any

import structlog

from .exceptions import InvalidStateTransitionError
from .models import (
    DEFAULT_TIMER_CONFIG,
    TimerAction,
    TimerActionType,
    TimerConfig,
    TimerPhase,
    TimerState,
    validate_timer_config,
    validate_transition,
)
from .utils import Clock, now_ms

log = structlog.get_logger()

TimerListener = Callable[[TimerState], None]


class PomodoroTimer:
    """番茄钟状态机"""

    def __init__(
        self,
        config: TimerConfig | None = None,
        initial_state: TimerState | None = None,
        clock: Clock | None = None,
    ) -> None:
        """
        Args:
            config: 计时器配置，None 时使用默认 25/5/15/4
            initial_state: 恢复用的初始状态
            clock: 毫秒时钟，测试时注入

        Raises:
            TimerConfigValidationError: 配置超出范围
        """
        self._clock = clock or now_ms
        self._config = validate_timer_config(
            (config or DEFAULT_TIMER_CONFIG).model_copy()
        )
        self._state = (
            initial_state.model_copy() if initial_state else self._create_initial_state()
        )
        self._listeners: list[TimerListener] = []

    def _create_initial_state(self) -> TimerState:
        return TimerState(last_update_timestamp=self._clock())

    def get_state(self) -> TimerState:
        """当前状态副本"""
        return self._state.model_copy()

    def get_config(self) -> TimerConfig:
        return self._config.model_copy()

    def subscribe(self, listener: TimerListener) -> Callable[[], None]:
        """订阅状态变化

        Returns:
            取消订阅函数
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify_listeners(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.get_state())
            except Exception as e:
                # 单个监听器失败不影响其他监听器与 dispatch
                log.error(
                    "timer_listener_failed",
                    phase=self._state.phase,
                    error_type=type(e).__name__,
                    error=str(e),
                )

    def dispatch(self, action: TimerAction) -> None:
        """派发动作并在状态变化时通知监听器

        Raises:
            InvalidStateTransitionError: 当前状态不允许该动作
            TimerConfigValidationError: UPDATE_CONFIG 合并后配置非法
        """
        before = self._state.model_dump()

        match action.type:
            case TimerActionType.START:
                self._handle_start()
            case TimerActionType.PAUSE:
                self._handle_pause()
            case TimerActionType.RESUME:
                self._handle_resume()
            case TimerActionType.SKIP:
                self._handle_skip()
            case TimerActionType.RESET:
                self._handle_reset()
            case TimerActionType.TICK:
                self._handle_tick(action.delta_seconds)
            case TimerActionType.UPDATE_CONFIG:
                self._handle_update_config(action.config or {})

        if self._state.model_dump() != before:
            self._notify_listeners()

    # 便捷方法

    def start(self) -> None:
        self.dispatch(TimerAction(type=TimerActionType.START))

    def pause(self) -> None:
        self.dispatch(TimerAction(type=TimerActionType.PAUSE))

    def resume(self) -> None:
        self.dispatch(TimerAction(type=TimerActionType.RESUME))

    def skip(self) -> None:
        self.dispatch(TimerAction(type=TimerActionType.SKIP))

    def reset(self) -> None:
        self.dispatch(TimerAction(type=TimerActionType.RESET))

    def tick(self, delta_seconds: int = 1) -> None:
        self.dispatch(TimerAction.tick(delta_seconds))

    def update_config(self, **changes: Any) -> None:
        self.dispatch(TimerAction.update_config(**changes))

    # 动作处理

    def _handle_start(self) -> None:
        if self._state.phase != TimerPhase.IDLE:
            raise InvalidStateTransitionError("start", "Timer can only be started from IDLE phase")

        self._transition_to(TimerPhase.WORK)
        self._state.is_running = True
        self._state.is_paused = False

    def _handle_pause(self) -> None:
        if not self._state.is_running:
            raise InvalidStateTransitionError("pause", "Timer must be running to pause")
        if self._state.phase != TimerPhase.WORK:
            raise InvalidStateTransitionError(
                "pause", "Can only pause during WORK phase (emergency pause only)"
            )

        self._state.is_paused = True
        self._state.last_update_timestamp = self._clock()

    def _handle_resume(self) -> None:
        if not self._state.is_paused:
            raise InvalidStateTransitionError("resume", "Timer must be paused to resume")

        self._state.is_paused = False
        self._state.last_update_timestamp = self._clock()

    def _handle_skip(self) -> None:
        if not self._state.is_running and not self._state.is_paused:
            raise InvalidStateTransitionError("skip", "Cannot skip when timer is not started")

        self._complete_phase()

    def _handle_reset(self) -> None:
        self._state = self._create_initial_state()

    def _handle_tick(self, delta_seconds: int) -> None:
        if not self._state.is_running or self._state.is_paused:
            return

        self._state.remaining_seconds = max(0, self._state.remaining_seconds - delta_seconds)
        self._state.last_update_timestamp = self._clock()

        if self._state.remaining_seconds == 0:
            self._complete_phase()

    def _handle_update_config(self, changes: dict[str, Any]) -> None:
        merged = TimerConfig.model_validate({**self._config.model_dump(), **changes})
        self._config = validate_timer_config(merged)

        # 尚未开始倒计时（或已停止）时，剩余时间跟随新时长
        if self._state.phase != TimerPhase.IDLE:
            if self._state.remaining_seconds == 0 or not self._state.is_running:
                self._state.remaining_seconds = self._config.duration_seconds(self._state.phase)

    def _complete_phase(self) -> None:
        current = self._state.phase

        if current == TimerPhase.WORK:
            self._state.completed_sessions += 1
            self._state.total_completed_sessions += 1
        elif current == TimerPhase.LONG_BREAK:
            self._state.completed_sessions = 0

        # 跳过暂停中的 WORK 时，下一阶段照常倒计时
        self._state.is_paused = False

        next_phase = self._next_phase(current)
        log.info(
            "phase_completed",
            phase=current,
            next_phase=next_phase,
            completed_sessions=self._state.completed_sessions,
        )
        self._transition_to(next_phase)

    def _next_phase(self, current: TimerPhase) -> TimerPhase:
        if current == TimerPhase.WORK:
            if self._state.completed_sessions >= self._config.sessions_before_long_break:
                return TimerPhase.LONG_BREAK
            return TimerPhase.SHORT_BREAK
        # IDLE / SHORT_BREAK / LONG_BREAK 之后都是 WORK
        return TimerPhase.WORK

    def _transition_to(self, phase: TimerPhase) -> None:
        """切换阶段并重置剩余时间

        Raises:
            InvalidStateTransitionError: 流转不在 VALID_TRANSITIONS 中
        """
        if not validate_transition(self._state.phase, phase):
            raise InvalidStateTransitionError(
                "transition", f"Invalid phase transition: {self._state.phase} -> {phase}"
            )
        self._state.phase = phase
        self._state.remaining_seconds = self._config.duration_seconds(phase)
        self._state.last_update_timestamp = self._clock()

    # 持久化

    def serialize(self) -> str:
        return json.dumps(
            {
                "state": self._state.model_dump(mode="json"),
                "config": self._config.model_dump(mode="json"),
            }
        )

    @classmethod
    def deserialize(
        cls,
        data: str,
        config: TimerConfig | None = None,
        clock: Clock | None = None,
    ) -> "PomodoroTimer":
        """从 serialize() 输出恢复

        Args:
            data: JSON 字符串
            config: 覆盖存档中的配置
            clock: 毫秒时钟
        """
        payload = json.loads(data)
        return cls(
            config=config or TimerConfig.model_validate(payload["config"]),
            initial_state=TimerState.model_validate(payload["state"]),
            clock=clock,
        )

    def sync_with_real_time(self, now: int | None = None) -> None:
        """按墙钟补偿离线期间流逝的时间（单次 TICK，最多完成一个阶段）"""
        if not self._state.is_running or self._state.is_paused:
            return

        current = self._clock() if now is None else now
        elapsed_seconds = (current - self._state.last_update_timestamp) // 1000
        if elapsed_seconds > 0:
            log.debug("timer_synced", elapsed_seconds=elapsed_seconds)
            self.dispatch(TimerAction.tick(int(elapsed_seconds)))

    def destroy(self) -> None:
        self._listeners.clear()
