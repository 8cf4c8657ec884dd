"""番茄钟状态机单元测试

测试内容：
1. 阶段流转与剩余时间
2. 暂停 / 恢复 / 跳过 / 重置
3. 长休息触发与会话计数
4. 配置校验与更新
5. 监听器通知与序列化
"""

import pytest
from pomodoro_rpg.exceptions import InvalidStateTransitionError, TimerConfigValidationError
from pomodoro_rpg.models import TimerConfig, TimerPhase, TimerState, validate_transition
from pomodoro_rpg.timer import PomodoroTimer


@pytest.fixture
def timer(clock) -> PomodoroTimer:
    return PomodoroTimer(clock=clock)


class TestTransitionTable:
    @pytest.mark.parametrize(
        "from_phase,to_phase",
        [
            (TimerPhase.IDLE, TimerPhase.WORK),
            (TimerPhase.WORK, TimerPhase.SHORT_BREAK),
            (TimerPhase.WORK, TimerPhase.LONG_BREAK),
            (TimerPhase.SHORT_BREAK, TimerPhase.WORK),
            (TimerPhase.LONG_BREAK, TimerPhase.WORK),
        ],
    )
    def test_valid_transition(self, from_phase, to_phase):
        """流转表允许的阶段切换"""
        assert validate_transition(from_phase, to_phase) is True

    @pytest.mark.parametrize(
        "from_phase,to_phase",
        [
            (TimerPhase.IDLE, TimerPhase.SHORT_BREAK),
            (TimerPhase.SHORT_BREAK, TimerPhase.LONG_BREAK),
            (TimerPhase.WORK, TimerPhase.WORK),
        ],
    )
    def test_invalid_transition(self, from_phase, to_phase):
        """流转表拒绝的阶段切换"""
        assert validate_transition(from_phase, to_phase) is False

    def test_timer_rejects_illegal_transition(self, timer: PomodoroTimer):
        """计时器内部阶段切换同样受流转表约束"""
        with pytest.raises(InvalidStateTransitionError, match="IDLE -> LONG_BREAK"):
            timer._transition_to(TimerPhase.LONG_BREAK)
        assert timer.get_state().phase == TimerPhase.IDLE


class TestTimerLifecycle:
    def test_initial_state_is_idle(self, timer: PomodoroTimer):
        """新计时器处于 IDLE 且未运行"""
        state = timer.get_state()
        assert state.phase == TimerPhase.IDLE
        assert state.remaining_seconds == 0
        assert state.is_running is False
        assert state.is_paused is False

    def test_start_enters_work(self, timer: PomodoroTimer):
        """start 进入 25 分钟的 WORK"""
        timer.start()
        state = timer.get_state()
        assert state.phase == TimerPhase.WORK
        assert state.remaining_seconds == 25 * 60
        assert state.is_running is True

    def test_start_outside_idle_raises(self, timer: PomodoroTimer):
        """非 IDLE 下 start 抛出状态错误"""
        timer.start()
        with pytest.raises(InvalidStateTransitionError):
            timer.start()

    def test_tick_counts_down(self, timer: PomodoroTimer):
        """tick 按秒扣减剩余时间"""
        timer.start()
        timer.tick(10)
        assert timer.get_state().remaining_seconds == 25 * 60 - 10

    def test_tick_ignored_when_idle(self, timer: PomodoroTimer):
        """IDLE 下 tick 不改变状态"""
        timer.tick(10)
        assert timer.get_state().phase == TimerPhase.IDLE

    def test_work_completion_goes_to_short_break(self, timer: PomodoroTimer):
        """WORK 结束进入短休息并计数"""
        timer.start()
        timer.tick(25 * 60)
        state = timer.get_state()
        assert state.phase == TimerPhase.SHORT_BREAK
        assert state.remaining_seconds == 5 * 60
        assert state.completed_sessions == 1
        assert state.total_completed_sessions == 1

    def test_oversized_tick_completes_only_one_phase(self, timer: PomodoroTimer):
        """超长 tick 只结束当前一个阶段"""
        timer.start()
        timer.tick(10_000)
        state = timer.get_state()
        assert state.phase == TimerPhase.SHORT_BREAK
        assert state.remaining_seconds == 5 * 60

    def test_fourth_session_triggers_long_break(self, timer: PomodoroTimer):
        """第 4 次专注完成后进入 15 分钟长休息"""
        timer.start()
        for _ in range(3):
            timer.skip()  # WORK -> SHORT_BREAK
            timer.skip()  # SHORT_BREAK -> WORK
        timer.skip()
        state = timer.get_state()
        assert state.phase == TimerPhase.LONG_BREAK
        assert state.remaining_seconds == 900
        assert state.completed_sessions == 4

    def test_long_break_resets_cycle_counter(self, timer: PomodoroTimer):
        """长休息结束后本轮计数归零，总数保留"""
        timer.start()
        for _ in range(4):
            timer.skip()
            timer.skip()
        state = timer.get_state()
        assert state.phase == TimerPhase.WORK
        assert state.completed_sessions == 0
        assert state.total_completed_sessions == 4


class TestPauseResume:
    def test_pause_resume_preserves_remaining(self, timer: PomodoroTimer, clock):
        """暂停期间剩余时间冻结，恢复后继续"""
        timer.start()
        timer.tick(60)
        timer.pause()
        remaining = timer.get_state().remaining_seconds

        clock.advance(300)
        timer.tick(300)
        assert timer.get_state().remaining_seconds == remaining

        timer.resume()
        state = timer.get_state()
        assert state.remaining_seconds == remaining
        assert state.is_paused is False
        assert state.is_running is True

    def test_skip_while_paused_runs_break(self, timer: PomodoroTimer):
        """暂停中跳过 WORK 后，休息阶段正常倒计时"""
        timer.start()
        timer.pause()
        timer.skip()
        state = timer.get_state()
        assert state.phase == TimerPhase.SHORT_BREAK
        assert state.is_paused is False

        timer.tick(60)
        assert timer.get_state().remaining_seconds == 4 * 60

    def test_paused_implies_running(self, timer: PomodoroTimer):
        """暂停状态仍算运行中"""
        timer.start()
        timer.pause()
        state = timer.get_state()
        assert state.is_paused is True
        assert state.is_running is True

    def test_pause_outside_work_raises(self, timer: PomodoroTimer):
        """只有 WORK 阶段可以暂停"""
        timer.start()
        timer.skip()
        with pytest.raises(InvalidStateTransitionError, match="WORK"):
            timer.pause()

    def test_pause_when_idle_raises(self, timer: PomodoroTimer):
        """IDLE 下暂停抛出状态错误"""
        with pytest.raises(InvalidStateTransitionError):
            timer.pause()

    def test_resume_when_not_paused_raises(self, timer: PomodoroTimer):
        """未暂停时恢复抛出状态错误"""
        timer.start()
        with pytest.raises(InvalidStateTransitionError):
            timer.resume()

    def test_skip_when_idle_raises(self, timer: PomodoroTimer):
        """IDLE 下跳过抛出状态错误"""
        with pytest.raises(InvalidStateTransitionError):
            timer.skip()

    def test_reset_returns_to_idle(self, timer: PomodoroTimer):
        """重置回到 IDLE 并清空计数"""
        timer.start()
        timer.skip()
        timer.reset()
        state = timer.get_state()
        assert state.phase == TimerPhase.IDLE
        assert state.total_completed_sessions == 0
        assert state.is_running is False


class TestTimerConfig:
    def test_invalid_config_rejected(self, clock):
        """非法配置一次报告全部错误"""
        with pytest.raises(TimerConfigValidationError) as exc_info:
            PomodoroTimer(TimerConfig(work_duration=0, sessions_before_long_break=11), clock=clock)
        assert len(exc_info.value.errors) == 2

    def test_update_config_merges(self, timer: PomodoroTimer):
        """部分更新保留其余配置项"""
        timer.update_config(work_duration=50)
        config = timer.get_config()
        assert config.work_duration == 50
        assert config.short_break_duration == 5

    def test_update_config_rejects_out_of_range(self, timer: PomodoroTimer):
        """越界更新被拒绝且原配置不变"""
        with pytest.raises(TimerConfigValidationError):
            timer.update_config(long_break_duration=61)
        assert timer.get_config().long_break_duration == 15

    def test_custom_long_break_threshold(self, clock):
        """自定义长休息间隔生效"""
        timer = PomodoroTimer(TimerConfig(sessions_before_long_break=1), clock=clock)
        timer.start()
        timer.skip()
        assert timer.get_state().phase == TimerPhase.LONG_BREAK


class TestListenersAndPersistence:
    def test_listener_notified_on_change(self, timer: PomodoroTimer):
        """状态变化时通知监听器"""
        seen: list[TimerState] = []
        timer.subscribe(seen.append)
        timer.start()
        assert len(seen) == 1
        assert seen[0].phase == TimerPhase.WORK

    def test_listener_not_notified_without_change(self, timer: PomodoroTimer):
        """状态未变时不通知"""
        seen: list[TimerState] = []
        timer.subscribe(seen.append)
        timer.tick(5)  # IDLE 下 tick 无变化
        assert seen == []

    def test_unsubscribe(self, timer: PomodoroTimer):
        """取消订阅后不再收到通知"""
        seen: list[TimerState] = []
        unsubscribe = timer.subscribe(seen.append)
        unsubscribe()
        timer.start()
        assert seen == []

    def test_failing_listener_does_not_block_others(self, timer: PomodoroTimer):
        """单个监听器异常不影响其他监听器"""
        seen: list[TimerState] = []

        def broken(_state: TimerState) -> None:
            raise RuntimeError("boom")

        timer.subscribe(broken)
        timer.subscribe(seen.append)
        timer.start()
        assert len(seen) == 1

    def test_serialize_roundtrip_preserves_progress(self, timer: PomodoroTimer, clock):
        """序列化后恢复的状态与配置一致"""
        timer.start()
        timer.tick(120)
        restored = PomodoroTimer.deserialize(timer.serialize(), clock=clock)
        assert restored.get_state() == timer.get_state()
        assert restored.get_config() == timer.get_config()

    def test_sync_with_real_time(self, timer: PomodoroTimer, clock):
        """按真实时间补扣离线期间的秒数"""
        timer.start()
        clock.advance(90)
        timer.sync_with_real_time()
        assert timer.get_state().remaining_seconds == 25 * 60 - 90
