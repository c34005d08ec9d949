import logging
from logging.handlers import RotatingFileHandler
from typing import Optional


class BotLogger:
    """自定義日誌系統"""

    def __init__(self, log_file: Optional[str] = None, level: int = logging.INFO):
        self.logger = logging.getLogger('DiceBot')
        self.logger.setLevel(level)

        # 重新配置時移除舊的處理器
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            # 設置文件處理器（帶輪換）
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=1024*1024,  # 1MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def info(self, message: str):
        """記錄信息級別日誌"""
        self.logger.info(message)

    def warning(self, message: str):
        """記錄警告級別日誌"""
        self.logger.warning(message)

    def error(self, message: str):
        """記錄錯誤級別日誌"""
        self.logger.error(message)

    def exception(self, message: str):
        """記錄錯誤及堆疊"""
        self.logger.exception(message)

    def debug(self, message: str):
        """記錄調試級別日誌"""
        self.logger.debug(message)


_logger: Optional[BotLogger] = None


def configure_logger(log_file: Optional[str] = None, level: str = "INFO") -> BotLogger:
    """按配置重建全局日誌實例"""
    global _logger
    _logger = BotLogger(log_file=log_file, level=getattr(logging, level.upper(), logging.INFO))
    return _logger


def get_logger() -> BotLogger:
    """獲取日誌實例"""
    global _logger
    if _logger is None:
        _logger = BotLogger()
    return _logger
