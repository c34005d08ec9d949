import io

import discord
from discord.ext import commands

from models.types import RollSettings, RollType
from utils.dice import roll_session
from utils.logger import get_logger
from utils.parser import RollParseError
from utils.render import DISCORD_MARKUP, dump_record, fit_display, format_final, render_roll

SILLY_TEXT = "As a non-language non-model, I just spit out what was written in my code and I can never vary."
EYES = ("eye", "eyes", "👀", "👁", "👁‍🗨")

# 沒有輸入時擲一顆普通骰子
DEFAULT_SETTINGS = RollSettings(number=1, sides=6)

ROLL_COLOR = 0x7289da
ERROR_COLOR = 0xff0000
EMBED_TITLE_LIMIT = 256
EMBED_DESCRIPTION_LIMIT = 4096


class DiceCog(commands.Cog, name="Dice"):
    """骰子相關指令"""
    def __init__(self, bot, config_manager):
        self.bot = bot
        self.config_manager = config_manager
        self.logger = get_logger()

    async def handle_roll(self, ctx, expression: str, roll_type: RollType, send_json: bool):
        """解析、擲骰並回覆結果"""
        expression = expression.strip()

        if expression in EYES:
            await ctx.reply(SILLY_TEXT)
            return

        if not expression:
            settings = DEFAULT_SETTINGS
            roll_type = RollType.STRAIGHT
            send_json = False
        else:
            try:
                settings = RollSettings.from_str(expression)
            except RollParseError as e:
                embed = discord.Embed(
                    title="Roll error",
                    description=(
                        f"{SILLY_TEXT}\n\nIn other words, it is likely you have made a mistake "
                        f"and I definitely cannot help you to fix it. Try again!\n\n💣 `{e}` 💣"
                    ),
                    color=ERROR_COLOR
                )
                await ctx.reply(embed=embed)
                return

        # 獲取公會配置
        guild_id = ctx.guild.id if ctx.guild else None
        rules = self.config_manager.get_guild_config(guild_id)

        results = roll_session(settings, roll_type)
        self.logger.debug(f"Dice roll: {results!r}")

        # 結果放在 embed 描述中，截斷上限需扣除固定文字的長度
        display = fit_display(results, EMBED_DESCRIPTION_LIMIT, rules.display_config(), DISCORD_MARKUP)
        rendered = render_roll(results, display, DISCORD_MARKUP, with_record=send_json)
        embed = discord.Embed(
            title=(settings.label or "Dice roll")[:EMBED_TITLE_LIMIT],
            description=rendered.text,
            color=ROLL_COLOR
        )

        try:
            if rendered.record is not None:
                data = dump_record(rendered.record).encode("utf-8")
                await ctx.reply(embed=embed, file=discord.File(io.BytesIO(data), filename="roll.json"))
            else:
                await ctx.reply(embed=embed)
        except discord.HTTPException:
            # 多半是超過平台的訊息長度限制，只回覆最終結果
            self.logger.exception(f"無法發送擲骰結果 {settings}")
            await ctx.reply(format_final(results.result().total, DISCORD_MARKUP))

    @commands.hybrid_command(name="roll", description="Roll die")
    async def roll_command(self, ctx, *, expression: str = ""):
        await self.handle_roll(ctx, expression, RollType.STRAIGHT, False)

    @commands.hybrid_command(name="data", description="Roll die, and send data output")
    async def data_command(self, ctx, *, expression: str = ""):
        await self.handle_roll(ctx, expression, RollType.STRAIGHT, True)

    @commands.hybrid_command(name="adv", description="Roll with advantage")
    async def adv_command(self, ctx, *, expression: str = ""):
        await self.handle_roll(ctx, expression, RollType.ADVANTAGE, False)

    @commands.hybrid_command(name="advantage", description="Roll with advantage")
    async def advantage_command(self, ctx, *, expression: str = ""):
        await self.handle_roll(ctx, expression, RollType.ADVANTAGE, False)

    @commands.hybrid_command(name="advantage_data", description="Roll with advantage, and send data output")
    async def advantage_data_command(self, ctx, *, expression: str = ""):
        await self.handle_roll(ctx, expression, RollType.ADVANTAGE, True)

    @commands.hybrid_command(name="dis", description="Roll with disadvantage")
    async def dis_command(self, ctx, *, expression: str = ""):
        await self.handle_roll(ctx, expression, RollType.DISADVANTAGE, False)

    @commands.hybrid_command(name="disadvantage", description="Roll with disadvantage")
    async def disadvantage_command(self, ctx, *, expression: str = ""):
        await self.handle_roll(ctx, expression, RollType.DISADVANTAGE, False)

    @commands.hybrid_command(name="disadvantage_data", description="Roll with disadvantage, and send data output")
    async def disadvantage_data_command(self, ctx, *, expression: str = ""):
        await self.handle_roll(ctx, expression, RollType.DISADVANTAGE, True)
