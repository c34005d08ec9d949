import discord
from discord.ext import commands


class HelpCog(commands.Cog, name="Help"):
    """幫助相關指令"""
    def __init__(self, bot, config_manager):
        self.bot = bot
        self.config_manager = config_manager

    def describe_commands(self) -> str:
        prefix = self.config_manager.global_config.command_prefix
        lines = []
        for command in sorted(self.bot.commands, key=lambda c: c.name):
            lines.append(f"`{prefix}{command.name}` - {command.description}")
        return "\n".join(lines)

    @commands.hybrid_command(name="help", description="Display help text")
    async def help_command(self, ctx):
        """顯示幫助信息"""
        embed = discord.Embed(
            title="These commands are supported:",
            description=self.describe_commands(),
            color=0x1abc9c
        )
        await ctx.send(embed=embed)
