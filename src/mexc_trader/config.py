"""配置加载模块 - 从环境变量和 .env 文件加载配置。"""

from decimal import Decimal
from enum import Enum
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(str, Enum):
    """日志格式枚举。"""

    JSON = "json"
    CONSOLE = "console"


class Settings(BaseSettings):
    """系统配置设置。

    从环境变量和 .env 文件加载配置。
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==================== MEXC API ====================
    mexc_api_key: str = Field(default="", description="MEXC API Key")
    mexc_api_secret: SecretStr = Field(default=SecretStr(""), description="MEXC API Secret")
    mexc_base_url: str = Field(
        default="https://contract.mexc.com",
        description="MEXC 合约 REST 根地址",
    )
    http_timeout: float = Field(default=5.0, gt=0, le=60, description="单次 HTTP 调用超时（秒）")

    # ==================== 交易参数 ====================
    symbol: str = Field(default="BTC_USDT", description="合约交易对")
    collateral_currency: str = Field(default="USDT", description="保证金币种")
    leverage: int = Field(default=50, description="杠杆倍数")
    max_leverage: int = Field(default=200, ge=1, description="交易所允许的最大杠杆")
    take_profit_ratio: Decimal = Field(default=Decimal("0.05"), description="止盈比例")
    stop_loss_ratio: Decimal = Field(default=Decimal("0.02"), description="止损比例")

    # ==================== 精度 ====================
    price_tick: Decimal = Field(default=Decimal("0.01"), gt=0, description="价格最小变动单位")
    quantity_decimals: int = Field(default=3, ge=0, le=8, description="下单数量小数位")
    external_oid_prefix: str = Field(
        default="py-bot",
        min_length=1,
        max_length=12,
        description="外部订单号前缀",
    )

    # ==================== 日志配置 ====================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="日志级别",
    )
    log_format: LogFormat = Field(
        default=LogFormat.CONSOLE,
        description="日志输出格式",
    )

    @field_validator("mexc_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """去掉根地址末尾的斜杠，路径统一以 / 开头。"""
        return v.rstrip("/")

    @field_validator("symbol", "collateral_currency")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()

    @property
    def has_credentials(self) -> bool:
        """是否已配置 API 凭证。"""
        return not self.validate_credentials()

    def validate_credentials(self) -> list[str]:
        """验证下单所需的 API 凭证，返回缺失项列表。"""
        missing = []
        if not self.mexc_api_key:
            missing.append("MEXC_API_KEY")
        if not self.mexc_api_secret.get_secret_value():
            missing.append("MEXC_API_SECRET")
        return missing


# 全局配置实例（延迟初始化）
_settings: Settings | None = None


def get_settings() -> Settings:
    """获取全局配置实例。"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
