"""事件模板目录

按严重度分组：flavor（纯氛围）、info（小效果）、warning（明显效果）、critical（重大效果）。
消息中的占位符由 EventGenerator 以效果绝对值替换。
"""

from ..models import (
    EffectRange,
    EventCategory,
    EventConditions,
    EventEffectRanges,
    EventSeverity,
    EventTemplate,
    TaskType,
    VisualCue,
    VisualCueType,
)

_S = EventSeverity
_C = EventCategory
_V = VisualCueType
_EXPEDITION = TaskType.EXPEDITION
_RAID = TaskType.RAID
_CRAFT = TaskType.CRAFT


def _r(low: float, high: float) -> EffectRange:
    return EffectRange(min=low, max=high)


def _cue(cue_type: VisualCueType, color: str | None = None) -> VisualCue:
    return VisualCue(type=cue_type, color=color)


def _template(
    template_id: str,
    severity: EventSeverity,
    category: EventCategory,
    messages: list[str],
    weight: float,
    tasks: list[TaskType] | None = None,
    cue: VisualCue | None = None,
    conditions: EventConditions | None = None,
    repeatable: bool = True,
    **effects: EffectRange,
) -> EventTemplate:
    return EventTemplate(
        template_id=template_id,
        severity=severity,
        category=category,
        messages=messages,
        effects=EventEffectRanges(**effects),
        visual_cue=cue,
        conditions=conditions,
        weight=weight,
        applicable_tasks=tasks or [],
        repeatable=repeatable,
    )


EVENT_TEMPLATES: list[EventTemplate] = [
    # ---- flavor ----
    _template(
        "flavor_bird_song", _S.FLAVOR, _C.FORTUNE,
        [
            "A bird lands nearby and sings a pleasant melody.",
            "The sound of distant birdsong fills the air.",
        ],
        weight=10,
    ),
    _template(
        "flavor_breeze", _S.FLAVOR, _C.FORTUNE,
        [
            "A gentle breeze passes through.",
            "The wind picks up slightly, rustling nearby foliage.",
        ],
        weight=10, tasks=[_EXPEDITION],
    ),
    _template(
        "flavor_footsteps", _S.FLAVOR, _C.MYSTERY,
        [
            "You hear distant footsteps, but see nothing.",
            "Strange footsteps echo in the distance.",
        ],
        weight=8, tasks=[_RAID, _EXPEDITION],
    ),
    _template(
        "flavor_shadow", _S.FLAVOR, _C.MYSTERY,
        [
            "A shadow passes overhead. Was it just a cloud?",
            "Something large briefly blocks out the sun.",
        ],
        weight=7,
    ),
    _template(
        "flavor_inscription", _S.FLAVOR, _C.MYSTERY,
        [
            "You notice ancient inscriptions on a nearby wall.",
            "Strange runes are carved into the stone here.",
        ],
        weight=6, tasks=[_RAID],
    ),
    _template(
        "flavor_campfire", _S.FLAVOR, _C.NPC,
        [
            "You spot a distant campfire. Other adventurers nearby?",
            "Smoke rises in the distance. Signs of civilization.",
        ],
        weight=8, tasks=[_EXPEDITION],
    ),
    _template(
        "flavor_echo", _S.FLAVOR, _C.MYSTERY,
        [
            "Your footsteps echo strangely in this place.",
            "An eerie echo follows every sound.",
        ],
        weight=7, tasks=[_RAID],
    ),
    # ---- info ----
    _template(
        "info_find_coins", _S.INFO, _C.LOOT,
        [
            "You find {gold} gold coins on the ground!",
            "A small pouch contains {gold} gold.",
            "Loose coins totaling {gold} gold are scattered about.",
        ],
        weight=15, cue=_cue(_V.SPARKLE, "#FFD700"),
        gold_modifier=_r(5, 15),
    ),
    _template(
        "info_find_materials", _S.INFO, _C.LOOT,
        [
            "You gather {materials} useful materials.",
            "You find {materials} crafting materials lying around.",
        ],
        weight=15, tasks=[_EXPEDITION, _CRAFT], cue=_cue(_V.SPARKLE, "#8B4513"),
        materials_modifier=_r(2, 5),
    ),
    _template(
        "info_stumble", _S.INFO, _C.HAZARD,
        [
            "You stumble over a root. -{damage} HP",
            "A loose stone causes you to trip. -{damage} HP",
        ],
        weight=12, tasks=[_EXPEDITION], cue=_cue(_V.DAMAGE, "#FF4444"),
        health_modifier=_r(-8, -3),
    ),
    _template(
        "info_rest", _S.INFO, _C.HEALTH,
        [
            "You take a moment to catch your breath. +{heal} HP",
            "A brief rest restores {heal} HP.",
        ],
        weight=12, cue=_cue(_V.SPARKLE, "#44FF44"),
        health_modifier=_r(5, 12),
    ),
    _template(
        "info_lucky_find", _S.INFO, _C.FORTUNE,
        [
            "You feel lucky! Success chance +{success}%",
            "Good fortune smiles upon you. Success +{success}%",
        ],
        weight=10, cue=_cue(_V.STAR, "#FFD700"),
        success_chance_modifier=_r(2, 5),
    ),
    _template(
        "info_unlucky_moment", _S.INFO, _C.FORTUNE,
        [
            "You have a bad feeling about this. Success -{success}%",
            "Your luck seems to have run out. Success -{success}%",
        ],
        weight=8, cue=_cue(_V.WARNING, "#FFA500"),
        success_chance_modifier=_r(-5, -2),
    ),
    _template(
        "info_minor_scratch", _S.INFO, _C.COMBAT,
        [
            "A minor skirmish leaves you scratched. -{damage} HP",
            "You take a glancing blow. -{damage} HP",
        ],
        weight=10, tasks=[_RAID, _EXPEDITION], cue=_cue(_V.DAMAGE),
        health_modifier=_r(-10, -5),
    ),
    _template(
        "info_weapon_sharpen", _S.INFO, _C.EQUIPMENT,
        [
            "You sharpen your weapon. Success +{success}%",
            "Your blade gleams with renewed sharpness. Success +{success}%",
        ],
        weight=8, conditions=EventConditions(requires_weapon=True),
        success_chance_modifier=_r(3, 6),
    ),
    _template(
        "info_merchant_encounter", _S.INFO, _C.NPC,
        [
            "You meet a traveling merchant. They buy some of your junk. +{gold} gold",
            "A merchant offers a fair trade. +{gold} gold",
        ],
        weight=10, tasks=[_EXPEDITION],
        gold_modifier=_r(8, 18),
    ),
    _template(
        "info_fatigue", _S.INFO, _C.HEALTH,
        ["Fatigue sets in. Success -{success}%", "You're getting tired. Success -{success}%"],
        weight=10,
        success_chance_modifier=_r(-6, -3),
    ),
    # ---- warning ----
    _template(
        "warn_enemy_encounter", _S.WARNING, _C.COMBAT,
        [
            "An enemy ambushes you! -{damage} HP",
            "You're attacked by a hostile creature! -{damage} HP",
            "Combat erupts! You take {damage} damage.",
        ],
        weight=8, tasks=[_RAID, _EXPEDITION], cue=_cue(_V.DAMAGE, "#FF0000"),
        health_modifier=_r(-25, -12), success_chance_modifier=_r(-8, -3),
    ),
    _template(
        "warn_treasure_found", _S.WARNING, _C.LOOT,
        [
            "You discover a hidden cache! +{gold} gold",
            "A treasure trove! +{gold} gold",
            "Jackpot! You find {gold} gold coins!",
        ],
        weight=12, tasks=[_RAID], cue=_cue(_V.TREASURE, "#FFD700"),
        gold_modifier=_r(25, 50),
    ),
    _template(
        "warn_trap", _S.WARNING, _C.HAZARD,
        [
            "You trigger a trap! -{damage} HP",
            "A hidden mechanism activates! -{damage} HP",
            "Trapped! You take {damage} damage.",
        ],
        weight=10, tasks=[_RAID], cue=_cue(_V.DAMAGE, "#FF4444"),
        conditions=EventConditions(requires_not_injured=True),
        health_modifier=_r(-30, -15),
    ),
    _template(
        "warn_equipment_damage", _S.WARNING, _C.EQUIPMENT,
        [
            "Your equipment takes a beating. Durability -{durability}",
            "Your gear is damaged! Durability -{durability}",
        ],
        weight=8, tasks=[_RAID], cue=_cue(_V.WARNING, "#FFA500"),
        conditions=EventConditions(requires_armor=True),
        durability_damage=_r(10, 25),
    ),
    _template(
        "warn_theft", _S.WARNING, _C.ECONOMY,
        ["A thief steals {gold} gold from you!", "You're robbed! Lost {gold} gold."],
        weight=6, cue=_cue(_V.WARNING, "#FF6600"),
        conditions=EventConditions(min_gold=20),
        gold_modifier=_r(-30, -15),
    ),
    _template(
        "warn_mysterious_shrine", _S.WARNING, _C.MYSTERY,
        [
            "You find a mysterious shrine. It grants you power! Success +{success}%",
            "An ancient altar bestows a blessing. Success +{success}%",
        ],
        weight=7, cue=_cue(_V.STAR, "#9966FF"),
        success_chance_modifier=_r(8, 15),
    ),
    _template(
        "warn_healing_fountain", _S.WARNING, _C.HEALTH,
        [
            "You discover a healing fountain! +{heal} HP",
            "Magical waters restore your vitality. +{heal} HP",
        ],
        weight=10, tasks=[_EXPEDITION], cue=_cue(_V.SPARKLE, "#44FFFF"),
        health_modifier=_r(20, 40),
    ),
    _template(
        "warn_material_cache", _S.WARNING, _C.LOOT,
        [
            "A cache of rare materials! +{materials} materials",
            "You find a stash of valuable resources. +{materials} materials",
        ],
        weight=10, tasks=[_EXPEDITION, _CRAFT], cue=_cue(_V.TREASURE, "#8B4513"),
        materials_modifier=_r(8, 15),
    ),
    _template(
        "warn_sudden_storm", _S.WARNING, _C.HAZARD,
        [
            "A sudden storm rolls in! -{damage} HP, Success -{success}%",
            "Lightning strikes nearby! -{damage} HP, Success -{success}%",
        ],
        weight=7, tasks=[_EXPEDITION], cue=_cue(_V.WARNING, "#4444FF"),
        health_modifier=_r(-20, -10), success_chance_modifier=_r(-8, -4),
    ),
    _template(
        "warn_chest_mimic", _S.WARNING, _C.COMBAT,
        ["That chest was a mimic! -{damage} HP", "The treasure chest attacks! -{damage} HP"],
        weight=5, tasks=[_RAID], cue=_cue(_V.DAMAGE, "#FF6600"),
        health_modifier=_r(-25, -15), gold_modifier=_r(5, 15),
    ),
    # ---- critical ----
    _template(
        "crit_boss_encounter", _S.CRITICAL, _C.COMBAT,
        [
            "A powerful enemy appears! Massive fight! -{damage} HP, Success -{success}%",
            "Boss enemy blocks your path! -{damage} HP, Success -{success}%",
        ],
        weight=4, tasks=[_RAID], cue=_cue(_V.SKULL, "#FF0000"), repeatable=False,
        health_modifier=_r(-50, -30), success_chance_modifier=_r(-15, -8),
    ),
    _template(
        "crit_legendary_loot", _S.CRITICAL, _C.LOOT,
        [
            "LEGENDARY TREASURE! +{gold} gold, +{chests} chest, Success +{success}%!",
            "You've struck it rich! +{gold} gold and an extra chest!",
        ],
        weight=3, tasks=[_RAID], cue=_cue(_V.STAR, "#FFD700"), repeatable=False,
        gold_modifier=_r(75, 150), extra_chests=_r(1, 1),
        success_chance_modifier=_r(10, 20),
    ),
    _template(
        "crit_deadly_trap", _S.CRITICAL, _C.HAZARD,
        [
            "DEADLY TRAP! Massive damage! -{damage} HP",
            "You trigger a catastrophic trap! -{damage} HP",
        ],
        weight=3, tasks=[_RAID], cue=_cue(_V.SKULL, "#FF0000"), repeatable=False,
        conditions=EventConditions(min_health_percent=40),
        health_modifier=_r(-60, -35), success_chance_modifier=_r(-10, -5),
    ),
    _template(
        "crit_divine_blessing", _S.CRITICAL, _C.FORTUNE,
        [
            "DIVINE BLESSING! Full heal and massive success boost! "
            "+{heal} HP, Success +{success}%",
            "The gods smile upon you! +{heal} HP, Success +{success}%",
        ],
        weight=2, cue=_cue(_V.STAR, "#FFFFFF"), repeatable=False,
        health_modifier=_r(50, 100), success_chance_modifier=_r(15, 25),
    ),
    _template(
        "crit_equipment_break", _S.CRITICAL, _C.EQUIPMENT,
        [
            "CRITICAL FAILURE! Your equipment is severely damaged! Durability -{durability}",
            "Your gear nearly breaks apart! Durability -{durability}",
        ],
        weight=2, tasks=[_RAID], cue=_cue(_V.WARNING, "#FF0000"),
        conditions=EventConditions(requires_armor=True),
        durability_damage=_r(40, 60), success_chance_modifier=_r(-12, -6),
    ),
    _template(
        "crit_master_thief", _S.CRITICAL, _C.ECONOMY,
        [
            "A master thief robs you blind! -{gold} gold stolen!",
            "You're ambushed by a notorious bandit! Lost {gold} gold.",
        ],
        weight=2, cue=_cue(_V.SKULL, "#660000"), repeatable=False,
        conditions=EventConditions(min_gold=50),
        gold_modifier=_r(-80, -40), health_modifier=_r(-20, -10),
    ),
    _template(
        "crit_ancient_power", _S.CRITICAL, _C.MYSTERY,
        [
            "You awaken an ancient power! +{xp} XP, Success +{success}%",
            "Mystical energy surges through you! +{xp} XP, Success +{success}%",
        ],
        weight=3, tasks=[_RAID], cue=_cue(_V.STAR, "#9966FF"), repeatable=False,
        conditions=EventConditions(min_level=3),
        xp_modifier=_r(50, 100), success_chance_modifier=_r(15, 20),
    ),
    _template(
        "crit_material_jackpot", _S.CRITICAL, _C.LOOT,
        [
            "MATERIAL JACKPOT! +{materials} rare materials!",
            "You discover a massive resource vein! +{materials} materials",
        ],
        weight=3, tasks=[_EXPEDITION, _CRAFT], cue=_cue(_V.TREASURE, "#8B4513"),
        repeatable=False,
        materials_modifier=_r(25, 50), gold_modifier=_r(20, 40),
    ),
    _template(
        "crit_earthquake", _S.CRITICAL, _C.HAZARD,
        [
            "EARTHQUAKE! The ground shakes violently! -{damage} HP, Success -{success}%",
            "Massive tremors rock the area! -{damage} HP, Success -{success}%",
        ],
        weight=2, cue=_cue(_V.WARNING, "#8B4513"), repeatable=False,
        health_modifier=_r(-45, -25), success_chance_modifier=_r(-15, -8),
    ),
]
