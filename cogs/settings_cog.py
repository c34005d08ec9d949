import discord
from discord.ext import commands

MAX_BUDGET = 4000


class SettingsCog(commands.Cog, name="Settings"):
    """服務器設定指令"""
    def __init__(self, bot, config_manager):
        self.bot = bot
        self.config_manager = config_manager

    async def update_budget(self, ctx, single: int, double: int):
        """更新此服務器的顯示長度上限"""
        if not ctx.guild:
            embed = discord.Embed(
                title="Error",
                description="This command can only be used in a server",
                color=0xff0000
            )
            await ctx.send(embed=embed)
            return

        guild_config = self.config_manager.get_guild_config(ctx.guild.id)
        guild_config.single_truncate = single
        guild_config.double_truncate = double
        self.config_manager.set_guild_config(ctx.guild.id, guild_config)

        embed = discord.Embed(
            title="Roll budget updated",
            description=f"Single roll: {single} characters\nEach of two rolls: {double} characters",
            color=0x7289da
        )
        await ctx.send(embed=embed)

    @commands.hybrid_command(name="roll_budget", description="Set how many characters of dice results are shown")
    @commands.has_permissions(manage_guild=True)
    async def roll_budget(self, ctx,
                          single: commands.Range[int, 1, MAX_BUDGET],
                          double: commands.Range[int, 1, MAX_BUDGET]):
        await self.update_budget(ctx, single, double)
