import discord
from discord.ext import commands
from pathlib import Path
from typing import Optional, Union

from utils.config import ConfigManager
from utils.logger import get_logger


def get_token(token: Optional[str] = None,
              token_file: Optional[Union[str, Path]] = None) -> str:
    """
    獲取機器人token：優先使用直接提供的token，其次讀取token文件
    """
    if token:
        return token
    if token_file:
        return Path(token_file).read_text(encoding="utf-8").strip()
    raise ValueError("No API Key provided")


class DiceBot:
    """擲骰機器人類"""
    def __init__(self, token: str, config_manager: ConfigManager,
                 sync_commands: Optional[bool] = None):
        self.token = token
        self.config_manager = config_manager
        self.logger = get_logger()

        global_config = config_manager.global_config
        self.sync_commands = global_config.sync_commands if sync_commands is None else sync_commands

        # 設置機器人
        intents = discord.Intents.default()
        intents.message_content = True  # 需要讀取消息內容

        self.bot = commands.Bot(
            command_prefix=global_config.command_prefix,
            intents=intents,
            description="Bot to roll die!",
            help_command=None
        )

        self.setup_events()

    def setup_events(self):
        """設置事件處理器"""
        @self.bot.event
        async def on_ready():
            self.logger.info(f'{self.bot.user} 已經上線! (ID: {self.bot.user.id})')
            self.logger.info(f'已連接到 {len(self.bot.guilds)} 個服務器')

            if self.sync_commands:
                # 同步應用命令
                try:
                    synced = await self.bot.tree.sync()
                    self.logger.info(f"應用命令已同步: {[c.name for c in synced]}")
                except discord.HTTPException as e:
                    self.logger.error(f"同步應用命令時出錯: {e}")

        @self.bot.event
        async def on_guild_join(guild):
            """當機器人加入服務器時的處理"""
            self.logger.info(f'加入了服務器: {guild.name} (ID: {guild.id})')

    async def add_cogs(self):
        """添加Cog模塊"""
        from cogs.dice_cog import DiceCog
        from cogs.help_cog import HelpCog
        from cogs.settings_cog import SettingsCog

        await self.bot.add_cog(DiceCog(self.bot, self.config_manager))
        await self.bot.add_cog(SettingsCog(self.bot, self.config_manager))
        await self.bot.add_cog(HelpCog(self.bot, self.config_manager))

    async def start(self):
        """啟動機器人"""
        self.logger.info("正在啟動擲骰機器人...")
        await self.add_cogs()
        await self.bot.start(self.token)

    async def close(self):
        """關閉機器人"""
        if not self.bot.is_closed():
            await self.bot.close()
