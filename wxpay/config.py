"""Gateway client configuration via environment variables."""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings

from wxpay.models.enums import SignType, TradeType

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Fields that must be non-empty before any call is attempted
MANDATORY_FIELDS = (
    "app_id",
    "mch_id",
    "app_key",
    "notify_url",
    "query_order_url",
    "place_order_url",
    "trade_type",
)


class WxPayConfig(BaseSettings):
    app_id: str = ""
    mch_id: str = ""
    app_key: str = Field(default="", repr=False)  # shared signing secret
    notify_url: str = ""
    query_order_url: str = "https://api.mch.weixin.qq.com/pay/orderquery"
    place_order_url: str = "https://api.mch.weixin.qq.com/pay/unifiedorder"
    trade_type: str = TradeType.APP.value
    device_info: str = "WEB"
    sign_type: SignType = SignType.MD5
    http_timeout_seconds: float = 20.0
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "WXPAY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "frozen": True,
    }

    def missing_fields(self) -> list[str]:
        """Names of mandatory fields that are empty or whitespace."""
        return [name for name in MANDATORY_FIELDS if not str(getattr(self, name)).strip()]


settings = WxPayConfig()


def configure_logging(level: str | None = None) -> None:
    """Install the root handler; call once from the host application."""
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
