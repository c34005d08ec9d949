#!/usr/bin/env python3
"""
Dice Roller Bot
在聊天中擲骰子的Discord機器人

    python main.py run --bot-token-file token.txt
    python main.py roll 2d20+3 Stealth --advantage --json
"""

import argparse
import asyncio
import os
import sys
from typing import List, Optional

import discord
from dotenv import load_dotenv

from bot import DiceBot, get_token
from models.types import RollSettings, RollType
from utils.config import ConfigManager
from utils.dice import roll_session
from utils.logger import configure_logger, get_logger
from utils.parser import RollParseError
from utils.render import PLAIN_MARKUP, dump_record, render_roll

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARSE_ERROR = 2


def _add_run_flags(p: argparse.ArgumentParser, suppress: bool = False) -> None:
    """run 的參數；子命令上用 SUPPRESS，避免覆蓋已在主命令上解析的值"""
    def default(value):
        return argparse.SUPPRESS if suppress else value

    token = p.add_mutually_exclusive_group()
    token.add_argument(
        "--bot-token",
        default=default(os.getenv("DISCORD_TOKEN")),
        help="Bot token (env DISCORD_TOKEN). Prefer a token file, command lines are visible to other processes.",
    )
    token.add_argument(
        "--bot-token-file",
        default=default(os.getenv("DISCORD_TOKEN_FILE")),
        help="Path to a file containing the bot token (env DISCORD_TOKEN_FILE).",
    )
    p.add_argument(
        "--set-my-commands",
        action="store_true",
        default=default(False),
        help="Sync slash commands on startup.",
    )
    p.add_argument(
        "--config",
        default=default("config.json"),
        help="Path to config.json (created with defaults if missing).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dice-roller-bot", description="Discord bot to roll die!")
    _add_run_flags(parser)
    sub = parser.add_subparsers(dest="command")

    run = sub.add_parser("run", help="Run bot")
    _add_run_flags(run, suppress=True)

    roll = sub.add_parser("roll", help="Roll locally and print the result")
    roll.add_argument("expression", nargs="+", help="Dice expression, e.g. 2d6+3 Fire damage")
    mode = roll.add_mutually_exclusive_group()
    mode.add_argument("--advantage", action="store_true", help="Roll twice, keep the higher total.")
    mode.add_argument("--disadvantage", action="store_true", help="Roll twice, keep the lower total.")
    roll.add_argument("--json", action="store_true", help="Also print the JSON record.")
    return parser


async def _run_bot(bot: DiceBot) -> None:
    try:
        await bot.start()
    finally:
        await bot.close()


def cmd_run(args: argparse.Namespace) -> int:
    config_manager = ConfigManager(config_path=args.config)
    global_config = config_manager.global_config
    logger = configure_logger(global_config.log_file, global_config.log_level)

    logger.info("Reading token...")
    try:
        token = get_token(args.bot_token, args.bot_token_file)
    except (ValueError, OSError) as e:
        logger.error(f"錯誤：{e}")
        return EXIT_ERROR

    bot = DiceBot(token, config_manager, sync_commands=True if args.set_my_commands else None)
    try:
        asyncio.run(_run_bot(bot))
    except KeyboardInterrupt:
        logger.info("收到中斷信號，正在關閉機器人...")
    except discord.DiscordException:
        logger.exception("機器人運行時出現錯誤")
        return EXIT_ERROR
    finally:
        logger.info("機器人已關閉")
    return EXIT_OK


def cmd_roll(args: argparse.Namespace) -> int:
    roll_type = RollType.STRAIGHT
    if args.advantage:
        roll_type = RollType.ADVANTAGE
    elif args.disadvantage:
        roll_type = RollType.DISADVANTAGE

    try:
        settings = RollSettings.from_str(" ".join(args.expression))
    except RollParseError as e:
        print(e, file=sys.stderr)
        return EXIT_PARSE_ERROR

    rendered = render_roll(roll_session(settings, roll_type), markup=PLAIN_MARKUP, with_record=args.json)
    print(rendered.text)
    if rendered.record is not None:
        print(dump_record(rendered.record))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """主函數"""
    # 加載環境變量
    load_dotenv()
    args = build_parser().parse_args(argv)
    get_logger().debug(f"Command line: {args}")

    if args.command == "roll":
        return cmd_roll(args)
    return cmd_run(args)


if __name__ == "__main__":
    sys.exit(main())
