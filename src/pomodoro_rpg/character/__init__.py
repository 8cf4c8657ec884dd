"""角色：属性重算、伤势与医院"""

from .hospital import (
    HEALING_SERVICES,
    BillPaymentResult,
    DebtInfo,
    HealingServiceConfig,
    HospitalSystem,
    HospitalVisitResult,
)
from .injury import (
    INJURY_SEVERITY_CONFIG,
    InjuryApplicationResult,
    InjuryManager,
    InjurySeverityConfig,
    calculate_injury_chance,
    roll_injury,
    roll_injury_severity,
)
from .state import (
    CharacterStore,
    calculate_bill_penalty,
    compute_stats,
    create_initial_character_state,
)

__all__ = [
    "CharacterStore",
    "compute_stats",
    "calculate_bill_penalty",
    "create_initial_character_state",
    "INJURY_SEVERITY_CONFIG",
    "InjurySeverityConfig",
    "InjuryApplicationResult",
    "InjuryManager",
    "calculate_injury_chance",
    "roll_injury",
    "roll_injury_severity",
    "HEALING_SERVICES",
    "HealingServiceConfig",
    "HospitalSystem",
    "HospitalVisitResult",
    "BillPaymentResult",
    "DebtInfo",
]
