"""ProgressionManager -- 经验、升级与连续专注天数

升到 n 级所需累计经验 = sum(floor(100 * i ** 1.5) for i in 1..n-1)，
即 2 级 100、3 级 382、4 级 901。
"""

from datetime import UTC, date, datetime

import structlog

from .character.state import CharacterStore
from .models import LevelUpEvent, ProgressionState, StreakData, TaskOutcome, XPGainEvent
from .utils import Clock, now_ms

log = structlog.get_logger()

BASE_XP = 100
XP_EXPONENT = 1.5
PARTIAL_XP_MULTIPLIER = 0.5


def calculate_xp_for_level(level: int) -> int:
    """从 1 级升到 level 级所需累计经验"""
    if level <= 1:
        return 0
    return sum(int(BASE_XP * i**XP_EXPONENT) for i in range(1, level))


def get_level_for_xp(total_xp: int) -> int:
    level = 1
    while calculate_xp_for_level(level + 1) <= total_xp:
        level += 1
    return level


def get_xp_curve(levels: int) -> list[int]:
    """2 .. levels+1 级各自的累计经验需求"""
    return [calculate_xp_for_level(i + 1) for i in range(1, levels + 1)]


class ProgressionManager:
    """经验与等级

    升级时同步调用 CharacterStore.level_up()，保证角色等级与成长等级一致。
    """

    def __init__(
        self,
        state: ProgressionState,
        character: CharacterStore,
        clock: Clock | None = None,
    ) -> None:
        self.state = state
        self._character = character
        self._clock = clock or now_ms

    def get_xp_to_next_level(self) -> int:
        return calculate_xp_for_level(self.state.level + 1) - self.state.total_xp

    def award_xp(self, base_amount: int, outcome: TaskOutcome, source: str) -> XPGainEvent:
        """按任务结果折算经验后发放（部分成功减半，失败为 0）"""
        if outcome == TaskOutcome.PARTIAL:
            amount = int(base_amount * PARTIAL_XP_MULTIPLIER)
        elif outcome == TaskOutcome.FAILURE:
            amount = 0
        else:
            amount = base_amount
        return self.add_xp(amount, outcome, source)

    def add_xp(self, amount: int, outcome: TaskOutcome, source: str) -> XPGainEvent:
        """发放已经按结果折算过的经验，可连续升多级

        Args:
            amount: 经验值（负数按 0 处理）
            outcome: 任务结果
            source: 来源（任务类型）

        Returns:
            XPGainEvent，升级时携带 LevelUpEvent
        """
        amount = max(0, amount)
        self.state.total_xp += amount

        previous_level = self.state.level
        while self.state.total_xp >= calculate_xp_for_level(self.state.level + 1):
            self.state.level += 1
            self._character.level_up()

        self._refresh_level_progress()

        level_up_event = None
        if self.state.level > previous_level:
            level_up_event = LevelUpEvent(
                previous_level=previous_level,
                new_level=self.state.level,
                overflow=self.state.current_xp,
                timestamp=self._clock(),
            )
            log.info(
                "level_up",
                previous_level=previous_level,
                new_level=self.state.level,
                total_xp=self.state.total_xp,
            )

        return XPGainEvent(
            amount=amount,
            source=source,
            outcome=outcome,
            leveled_up=level_up_event is not None,
            level_up_event=level_up_event,
            timestamp=self._clock(),
        )

    def _refresh_level_progress(self) -> None:
        self.state.current_xp = self.state.total_xp - calculate_xp_for_level(self.state.level)
        self.state.xp_to_next_level = self.get_xp_to_next_level()

    def get_progress_percentage(self) -> int:
        """本级进度百分比 0-100"""
        needed = calculate_xp_for_level(self.state.level + 1) - calculate_xp_for_level(
            self.state.level
        )
        if needed <= 0 or self.state.xp_to_next_level == 0:
            return 100
        return min(100, self.state.current_xp * 100 // needed)

    def sync_with_character(self) -> None:
        """以成长等级为准修正角色等级"""
        if self.state.level != self._character.state.level:
            self._character.set_level(self.state.level)

    # 连续天数

    def _today(self) -> date:
        return datetime.fromtimestamp(self._clock() / 1000, tz=UTC).date()

    def check_streak_status(self) -> str:
        """返回 continue / break / already-completed"""
        last = self.state.streak.last_completion_date
        if last is None:
            return "continue"
        today = self._today()
        last_date = date.fromisoformat(last)
        if last_date == today:
            return "already-completed"
        return "continue" if (today - last_date).days == 1 else "break"

    def record_session_completion(self) -> StreakData:
        """一个 WORK 阶段完成后更新连续天数，同一天只计一次"""
        status = self.check_streak_status()
        if status == "already-completed":
            return self.state.streak

        streak = self.state.streak
        if status == "break":
            streak.current_streak = 0
        streak.current_streak += 1
        streak.total_active_days += 1
        streak.longest_streak = max(streak.longest_streak, streak.current_streak)
        streak.last_completion_date = self._today().isoformat()
        return streak
