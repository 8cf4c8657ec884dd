"""职业配置目录"""

from ..models import CharacterClass, CharacterStats, ClassConfig, StatBonuses

# 所有职业起始生命 100，每级 +10
CLASS_CONFIGS: dict[CharacterClass, ClassConfig] = {
    CharacterClass.VANGUARD: ClassConfig(
        character_class=CharacterClass.VANGUARD,
        name="Vanguard",
        description="A stalwart frontline fighter with high defense and balanced stats.",
        base_stats=CharacterStats(
            power=10, defense=15, focus=10, luck=5, health=100, max_health=100
        ),
        stat_growth=StatBonuses(power=2, defense=3, focus=2, luck=1, max_health=10),
        available=True,
    ),
    CharacterClass.ARCANIST: ClassConfig(
        character_class=CharacterClass.ARCANIST,
        name="Arcanist",
        description="A scholar of arcane arts who trades resilience for raw power and luck.",
        base_stats=CharacterStats(
            power=15, defense=5, focus=8, luck=12, health=100, max_health=100
        ),
        stat_growth=StatBonuses(power=3, defense=1, focus=2, luck=3, max_health=10),
        available=False,
    ),
    CharacterClass.ROGUE: ClassConfig(
        character_class=CharacterClass.ROGUE,
        name="Rogue",
        description="A nimble opportunist relying on focus and fortune.",
        base_stats=CharacterStats(
            power=12, defense=8, focus=15, luck=10, health=100, max_health=100
        ),
        stat_growth=StatBonuses(power=2, defense=2, focus=3, luck=2, max_health=10),
        available=False,
    ),
}


def get_class_config(character_class: CharacterClass) -> ClassConfig:
    return CLASS_CONFIGS[character_class]


def get_available_classes() -> list[ClassConfig]:
    """可选职业（当前仅 Vanguard）"""
    return [c for c in CLASS_CONFIGS.values() if c.available]
