import json
import os
from typing import Dict, Optional
from dataclasses import dataclass, asdict, fields

from utils.render import DisplayConfig


@dataclass
class GlobalConfig:
    """全局配置"""
    command_prefix: str = "!"
    sync_commands: bool = False
    log_file: Optional[str] = "bot.log"
    log_level: str = "INFO"


@dataclass
class GuildConfig:
    """公會配置"""
    # 訊息長度上限，見 DisplayConfig
    single_truncate: int = 4000
    double_truncate: int = 2000

    def display_config(self) -> DisplayConfig:
        return DisplayConfig(
            single_truncate=self.single_truncate,
            double_truncate=self.double_truncate
        )


def _from_dict(cls, data: dict):
    """只取已知欄位，缺少的使用預設值"""
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in known})


class ConfigManager:
    """配置管理器"""
    def __init__(self, config_path: str = "config.json"):
        self.config_path = config_path
        self.global_config = GlobalConfig()
        self.guild_configs: Dict[int, GuildConfig] = {}
        self.load_config()

    def load_config(self):
        """加載配置"""
        if os.path.exists(self.config_path):
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)

            self.global_config = _from_dict(GlobalConfig, data.get('global', {}))

            guild_data = data.get('guilds', {})
            for guild_id, cfg in guild_data.items():
                self.guild_configs[int(guild_id)] = _from_dict(GuildConfig, cfg)
        else:
            # 如果配置文件不存在，創建默認配置
            self.save_config()

    def save_config(self):
        """保存配置"""
        data = {
            'global': asdict(self.global_config),
            'guilds': {str(guild_id): asdict(config)
                      for guild_id, config in self.guild_configs.items()}
        }

        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def get_guild_config(self, guild_id: Optional[int]) -> GuildConfig:
        """獲取公會配置，私訊使用默認配置"""
        if guild_id is None:
            return GuildConfig()
        return self.guild_configs.get(guild_id, GuildConfig())

    def set_guild_config(self, guild_id: int, config: GuildConfig):
        """設置公會配置"""
        self.guild_configs[guild_id] = config
        self.save_config()
