"""HospitalSystem -- 医院治疗、账单与债务

治疗总是成功：金币足够时当场付清，不够时照常治疗并生成账单。
账单按每 10 金币 1 点专注 / 成功率惩罚计算，最多 10 点，付清后移除。
"""

from pydantic import BaseModel, Field

from ..models import HealingOption, HospitalBill, InjuryState
from ..utils import Clock, now_ms
from .injury import INJURY_SEVERITY_CONFIG
from .state import calculate_bill_penalty

MS_PER_DAY = 1000 * 60 * 60 * 24


class HealingServiceConfig(BaseModel):
    """治疗方式配置"""

    id: HealingOption
    name: str
    description: str
    cost: int = Field(default=0, description="固定费用；医院费用按伤势等级动态计算")
    heals_injury: bool
    restores_health: bool
    health_restoration: int = Field(description="药水/休息为固定值，医院为百分比")
    available: bool = True


HEALING_SERVICES: dict[HealingOption, HealingServiceConfig] = {
    HealingOption.POTION: HealingServiceConfig(
        id=HealingOption.POTION,
        name="Use Healing Potion",
        description="Consume a healing potion from your inventory to heal injuries",
        heals_injury=True,
        restores_health=True,
        health_restoration=50,
    ),
    HealingOption.HOSPITAL: HealingServiceConfig(
        id=HealingOption.HOSPITAL,
        name="Hospital Treatment",
        description="Receive professional medical care (may incur debt if insufficient funds)",
        heals_injury=True,
        restores_health=True,
        health_restoration=100,
    ),
    HealingOption.REST: HealingServiceConfig(
        id=HealingOption.REST,
        name="Rest & Recovery",
        description="Natural healing over time (takes multiple Pomodoro cycles)",
        heals_injury=False,
        restores_health=True,
        health_restoration=25,
        available=False,
    ),
}


class HospitalVisitResult(BaseModel):
    success: bool
    bill_created: bool = False
    bill_amount: int = 0
    gold_paid: int = 0
    message: str


class BillPaymentResult(BaseModel):
    success: bool
    amount_paid: int = 0
    remaining_gold: int
    message: str


class DebtInfo(BaseModel):
    has_debt: bool = False
    amount: int = 0
    penalty: int = 0
    days_overdue: int = 0


class HospitalSystem:
    """医院服务

    只做计算并返回结果模型，金币扣减、治愈与账单写入由调用方根据结果执行。
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or now_ms

    @staticmethod
    def calculate_treatment_cost(injury: InjuryState) -> int:
        if not injury.is_injured:
            return 0
        return INJURY_SEVERITY_CONFIG[injury.severity].healing_cost

    def process_hospital_visit(self, injury: InjuryState, current_gold: int) -> HospitalVisitResult:
        """处理一次就医

        Args:
            injury: 当前伤势
            current_gold: 当前金币

        Returns:
            HospitalVisitResult；未受伤时 success=False。金币不足时先付清现有金币，
            差额记入账单
        """
        if not injury.is_injured:
            return HospitalVisitResult(
                success=False,
                message="You are not injured and do not need treatment.",
            )

        cost = self.calculate_treatment_cost(injury)
        if current_gold >= cost:
            return HospitalVisitResult(
                success=True,
                gold_paid=cost,
                message=f"Treatment successful! Paid {cost} gold. You are now fully healed.",
            )

        shortfall = cost - current_gold
        return HospitalVisitResult(
            success=True,
            gold_paid=current_gold,
            bill_created=True,
            bill_amount=shortfall,
            message=(
                f"Treatment successful! You paid {current_gold} of the {cost} gold fee. "
                f"A bill of {shortfall} gold has been created."
            ),
        )

    def generate_bill(self, amount: int) -> HospitalBill:
        return HospitalBill(
            amount=amount,
            created_at=self._clock(),
            penalty=calculate_bill_penalty(amount),
        )

    @staticmethod
    def process_bill_payment(bill: HospitalBill | None, current_gold: int) -> BillPaymentResult:
        if bill is None:
            return BillPaymentResult(
                success=False,
                remaining_gold=current_gold,
                message="You have no outstanding bills.",
            )

        if current_gold < bill.amount:
            return BillPaymentResult(
                success=False,
                remaining_gold=current_gold,
                message=(
                    f"Insufficient funds. You need {bill.amount} gold "
                    f"but only have {current_gold} gold."
                ),
            )

        return BillPaymentResult(
            success=True,
            amount_paid=bill.amount,
            remaining_gold=current_gold - bill.amount,
            message=(
                f"Bill paid successfully! Paid {bill.amount} gold. "
                "The success penalty has been removed."
            ),
        )

    def _days_overdue(self, bill: HospitalBill) -> int:
        return (self._clock() - bill.created_at) // MS_PER_DAY

    def get_bill_status_message(self, bill: HospitalBill | None) -> str:
        if bill is None:
            return "No outstanding bills"
        days = self._days_overdue(bill)
        plural = "" if days == 1 else "s"
        return f"Outstanding: {bill.amount} gold ({days} day{plural} old, -{bill.penalty}% success)"

    def get_debt_info(self, bill: HospitalBill | None) -> DebtInfo:
        if bill is None:
            return DebtInfo()
        return DebtInfo(
            has_debt=True,
            amount=bill.amount,
            penalty=bill.penalty,
            days_overdue=self._days_overdue(bill),
        )

    def can_afford_treatment(self, injury: InjuryState, current_gold: int) -> bool:
        return current_gold >= self.calculate_treatment_cost(injury)

    @staticmethod
    def can_afford_bill_payment(bill: HospitalBill | None, current_gold: int) -> bool:
        return bill is None or current_gold >= bill.amount

    @staticmethod
    def get_healing_service(option: HealingOption) -> HealingServiceConfig:
        return HEALING_SERVICES[option]

    @staticmethod
    def get_available_healing_services() -> list[HealingServiceConfig]:
        return [s for s in HEALING_SERVICES.values() if s.available]
