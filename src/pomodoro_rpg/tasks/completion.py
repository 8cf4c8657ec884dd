"""TaskCompletionHandler -- 把任务结算结果落到角色与背包上

经验和宝箱由 GameController 交给成长系统和宝箱管理器处理，这里只负责
金币、材料、伤势与完成计数。
"""

import structlog

from ..character.state import CharacterStore
from ..data.items import create_material_stack
from ..inventory import InventoryManager
from ..models import InjurySeverity, TaskCompletionResult, TaskOutcome

log = structlog.get_logger()


class TaskCompletionHandler:
    def __init__(self, character: CharacterStore, inventory: InventoryManager) -> None:
        self._character = character
        self._inventory = inventory

    def process_completion(self, result: TaskCompletionResult) -> list[str]:
        """应用结算结果

        Returns:
            需要提示给玩家的警告（伤势、账单）
        """
        self._apply_rewards(result)

        if result.was_injured and result.injury_severity is not None:
            self._character.apply_injury(result.injury_severity)

        if result.outcome in (TaskOutcome.SUCCESS, TaskOutcome.PARTIAL):
            self._character.increment_tasks_completed()
        else:
            self._character.increment_tasks_failed()

        self._character.recalculate_stats(
            self._inventory.get_equipment_bonuses(self._character.state.equipment)
        )
        return self.get_warnings()

    def _apply_rewards(self, result: TaskCompletionResult) -> None:
        rewards = result.rewards
        self._inventory.add_gold(rewards.gold)
        if rewards.materials > 0:
            added = self._inventory.add_item(create_material_stack(), rewards.materials)
            if added.items_overflow:
                log.warning(
                    "materials_overflow",
                    lost=sum(o.quantity for o in added.items_overflow),
                )

    def get_injury_warning(self) -> str | None:
        injury = self._character.state.injury
        if injury.is_injured and injury.severity == InjurySeverity.SEVERE:
            return "You have a severe injury! Visit the hospital before attempting another task."
        if injury.is_injured:
            return "You are injured. Consider visiting the hospital to heal before your next task."
        return None

    def get_bill_warning(self) -> str | None:
        bill = self._character.state.hospital_bill
        if bill and bill.amount > 0:
            return (
                f"You have an outstanding hospital bill of {bill.amount} gold. "
                "Pay it to remove the success penalty."
            )
        return None

    def get_warnings(self) -> list[str]:
        return [w for w in (self.get_injury_warning(), self.get_bill_warning()) if w]
