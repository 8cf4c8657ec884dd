"""医院与账单单元测试

测试内容：
1. 治疗费用与就医结果
2. 账单生成、惩罚与还款
3. 债务信息与治疗方式
"""

import pytest
from pomodoro_rpg.character import HospitalSystem
from pomodoro_rpg.models import HealingOption, InjuryState, InjurySeverity

MS_PER_DAY = 24 * 60 * 60 * 1000


@pytest.fixture
def hospital(clock) -> HospitalSystem:
    return HospitalSystem(clock)


def injured(severity: InjurySeverity) -> InjuryState:
    return InjuryState(is_injured=True, severity=severity, success_penalty=5)


class TestTreatment:
    @pytest.mark.parametrize(
        "severity,cost",
        [
            (InjurySeverity.MINOR, 20),
            (InjurySeverity.MODERATE, 50),
            (InjurySeverity.SEVERE, 100),
        ],
    )
    def test_treatment_cost(self, severity, cost):
        """治疗费用按伤势等级"""
        assert HospitalSystem.calculate_treatment_cost(injured(severity)) == cost

    def test_not_injured(self, hospital: HospitalSystem):
        """未受伤时无需治疗"""
        result = hospital.process_hospital_visit(InjuryState(), 100)
        assert result.success is False
        assert HospitalSystem.calculate_treatment_cost(InjuryState()) == 0

    def test_paid_visit(self, hospital: HospitalSystem):
        """金币足够时全额支付"""
        result = hospital.process_hospital_visit(injured(InjurySeverity.MINOR), 100)
        assert result.success is True
        assert result.gold_paid == 20
        assert result.bill_created is False

    def test_visit_on_credit_creates_bill(self, hospital: HospitalSystem):
        """金币不足时付清现有金币并为差额开账单"""
        result = hospital.process_hospital_visit(injured(InjurySeverity.MODERATE), 10)
        assert result.success is True
        assert result.bill_created is True
        assert result.bill_amount == 40
        assert result.gold_paid == 10
        assert hospital.can_afford_treatment(injured(InjurySeverity.MODERATE), 10) is False


class TestBills:
    def test_generate_bill_penalty(self, hospital: HospitalSystem, clock):
        """账单惩罚按金额计算并封顶"""
        bill = hospital.generate_bill(50)
        assert bill.penalty == 5
        assert bill.created_at == clock()
        assert hospital.generate_bill(250).penalty == 10

    def test_payment(self, hospital: HospitalSystem):
        """金币不足时付款失败，足够时全额结清"""
        bill = hospital.generate_bill(50)
        assert HospitalSystem.process_bill_payment(bill, 30).success is False
        result = HospitalSystem.process_bill_payment(bill, 80)
        assert result.success is True
        assert result.amount_paid == 50
        assert result.remaining_gold == 30

    def test_no_bill_payment(self):
        """没有账单时无需付款"""
        result = HospitalSystem.process_bill_payment(None, 10)
        assert result.success is False
        assert result.message == "You have no outstanding bills."
        assert HospitalSystem.can_afford_bill_payment(None, 0) is True

    def test_status_message_and_debt(self, hospital: HospitalSystem, clock):
        """账单状态文本与欠款信息"""
        bill = hospital.generate_bill(50)
        clock.now += MS_PER_DAY
        assert hospital.get_bill_status_message(bill) == (
            "Outstanding: 50 gold (1 day old, -5% success)"
        )
        debt = hospital.get_debt_info(bill)
        assert debt.has_debt is True
        assert debt.days_overdue == 1
        assert hospital.get_debt_info(None).has_debt is False
        assert hospital.get_bill_status_message(None) == "No outstanding bills"


class TestHealingServices:
    def test_rest_unavailable(self):
        """休养服务未开放"""
        options = {s.id for s in HospitalSystem.get_available_healing_services()}
        assert options == {HealingOption.POTION, HealingOption.HOSPITAL}

    def test_hospital_service(self):
        """医院服务可治愈伤势"""
        service = HospitalSystem.get_healing_service(HealingOption.HOSPITAL)
        assert service.heals_injury is True
