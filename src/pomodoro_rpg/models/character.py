"""角色数据模型

computed_stats 始终是 base_stats + 当前修正（装备、状态效果、伤势、账单）的纯函数，
由 CharacterStore.recalculate_stats() 负责重算。
"""

from pydantic import BaseModel, Field

from .enums import CharacterClass, EquipmentSlot, InjurySeverity, StatusEffectType


class CharacterStats(BaseModel):
    """角色属性"""

    power: int = Field(default=0, description="力量（物理任务成功率）")
    defense: int = Field(default=0, description="防御（降低受伤几率）")
    focus: int = Field(default=0, description="专注（智力任务成功率）")
    luck: int = Field(default=0, description="幸运（掉落品质、暴击）")
    health: int = Field(default=0, description="当前生命值")
    max_health: int = Field(default=0, description="最大生命值")


class StatBonuses(BaseModel):
    """部分属性增量（装备加成、状态效果修正）"""

    power: int = 0
    defense: int = 0
    focus: int = 0
    luck: int = 0
    max_health: int = 0

    def __add__(self, other: "StatBonuses") -> "StatBonuses":
        return StatBonuses(
            power=self.power + other.power,
            defense=self.defense + other.defense,
            focus=self.focus + other.focus,
            luck=self.luck + other.luck,
            max_health=self.max_health + other.max_health,
        )

    def is_empty(self) -> bool:
        return not any((self.power, self.defense, self.focus, self.luck, self.max_health))


class EquippedItem(BaseModel):
    """已装备物品引用（指向背包中的物品 ID）"""

    item_id: str = Field(description="物品 ID")
    slot: EquipmentSlot = Field(description="装备栏位")
    durability: int = Field(default=100, ge=0, le=100, description="耐久度")


class Equipment(BaseModel):
    """三个固定装备栏"""

    weapon: EquippedItem | None = None
    armor: EquippedItem | None = None
    accessory: EquippedItem | None = None

    def get(self, slot: EquipmentSlot) -> EquippedItem | None:
        return getattr(self, slot.value)

    def equipped_item_ids(self) -> list[str]:
        return [e.item_id for e in (self.weapon, self.armor, self.accessory) if e is not None]


class InjuryState(BaseModel):
    """伤势状态"""

    is_injured: bool = Field(default=False, description="是否受伤")
    severity: InjurySeverity = Field(default=InjurySeverity.MINOR, description="伤势等级")
    success_penalty: int = Field(default=0, ge=0, description="任务成功率惩罚（百分点）")
    injured_at: int | None = Field(default=None, description="受伤时间（epoch 毫秒）")


class HospitalBill(BaseModel):
    """医院账单 -- penalty = min(10, floor(amount / 10))"""

    amount: int = Field(ge=0, description="欠款金额")
    created_at: int = Field(description="创建时间（epoch 毫秒）")
    penalty: int = Field(ge=0, le=10, description="专注惩罚 / 成功率惩罚")


class StatusEffect(BaseModel):
    """状态效果（增益 / 减益）"""

    id: str = Field(description="效果 ID")
    name: str = Field(description="显示名")
    type: StatusEffectType = Field(description="buff / debuff")
    stat_modifiers: StatBonuses = Field(default_factory=StatBonuses, description="属性修正")
    duration: int | None = Field(
        default=None,
        description="持续时间（毫秒），None 表示永久直到手动移除",
    )
    applied_at: int = Field(description="施加时间（epoch 毫秒）")
    stacks: int = Field(default=1, ge=1, description="叠加层数")


class CharacterMetadata(BaseModel):
    created_at: int = Field(description="创建时间（epoch 毫秒）")
    tasks_completed: int = Field(default=0, ge=0)
    tasks_failed: int = Field(default=0, ge=0)


class CharacterState(BaseModel):
    """角色完整状态"""

    character_class: CharacterClass = Field(default=CharacterClass.VANGUARD, description="职业")
    level: int = Field(default=1, ge=1, description="等级")
    base_stats: CharacterStats = Field(description="基础属性（职业 + 等级成长）")
    computed_stats: CharacterStats = Field(description="最终属性（含全部修正）")
    equipment: Equipment = Field(default_factory=Equipment, description="装备")
    injury: InjuryState = Field(default_factory=InjuryState, description="伤势")
    hospital_bill: HospitalBill | None = Field(default=None, description="未结医院账单")
    status_effects: list[StatusEffect] = Field(default_factory=list, description="状态效果")
    metadata: CharacterMetadata = Field(description="统计元数据")


class ClassConfig(BaseModel):
    """职业配置"""

    character_class: CharacterClass
    name: str
    description: str
    base_stats: CharacterStats
    stat_growth: StatBonuses = Field(description="每级成长（max_health 为生命上限成长）")
    available: bool = True
