"""CLI 入口模块 -- python -m pomodoro_rpg <command>

支持的命令：
  show   打印存档摘要
  new    创建新存档（覆盖已有存档）
  reset  删除存档
"""

import asyncio
import sys

from .config import load_game_settings
from .logging_config import setup_logging
from .models import GameState
from .store import create_save_system

_COMMANDS = {
    "show": "打印存档摘要",
    "new": "创建新存档（覆盖已有存档）",
    "reset": "删除存档",
}


def _print_usage() -> None:
    print("用法: python -m pomodoro_rpg <command>")
    print("命令:")
    for name, description in _COMMANDS.items():
        print(f"  {name:<6} {description}")


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        _print_usage()
        sys.exit(1)

    command = sys.argv[1]
    if command not in _COMMANDS:
        print(f"未知命令: {command}")
        print(f"可用命令: {', '.join(_COMMANDS)}")
        sys.exit(1)

    setup_logging()
    sys.exit(asyncio.run(run_command(command)))


async def run_command(command: str) -> int:
    """执行命令，返回进程退出码"""
    from .engine import GameStateManager

    settings = load_game_settings()
    print(f"存档路径: {settings.db_path}")

    save_system = await create_save_system(settings.db_path, settings.save_debounce_ms)
    manager = GameStateManager(save_system)
    try:
        if command == "show":
            result = await manager.load()
            if not result.success:
                print(f"无法读取存档: {result.error}")
                return 1
            print(format_summary(result.data))
        elif command == "new":
            result = await manager.new_game()
            if not result.success:
                print(f"创建失败: {result.error}")
                return 1
            print("已创建新存档")
            print(format_summary(result.data))
        else:
            result = await manager.clear()
            if not result.success:
                print(f"删除失败: {result.error}")
                return 1
            print("存档已删除")
        return 0
    finally:
        await save_system.close()


def format_summary(state: GameState) -> str:
    """存档摘要文本"""
    character = state.character
    stats = character.computed_stats
    lines = [
        f"职业: {character.character_class}  等级: {character.level}",
        (
            f"生命: {stats.health}/{stats.max_health}  力量: {stats.power}  "
            f"防御: {stats.defense}  专注: {stats.focus}  幸运: {stats.luck}"
        ),
        f"经验: {state.progression.total_xp}（距下一级 {state.progression.xp_to_next_level}）",
        f"金币: {state.inventory.gold}  未开宝箱: {len(state.chests)}",
        (
            f"计时器: {state.timer.phase}  剩余 {state.timer.remaining_seconds} 秒  "
            f"已完成专注 {state.timer.total_completed_sessions} 次"
        ),
    ]
    if character.injury.is_injured:
        lines.append(f"伤势: {character.injury.severity}（成功率 -{character.injury.success_penalty}%）")
    if character.hospital_bill:
        lines.append(f"医院账单: {character.hospital_bill.amount} 金币")
    stats_total = state.tasks.statistics.total
    lines.append(
        f"任务: 共 {stats_total.started} 次，成功 {stats_total.succeeded}，"
        f"部分成功 {stats_total.partial}，失败 {stats_total.failed}"
    )
    return "\n".join(lines)


if __name__ == "__main__":
    main()
