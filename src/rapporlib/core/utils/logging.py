"""
Logging setup for the encoder with masking of privacy-relevant record fields.
"""
# 说明：编码器日志初始化工具，负责统一格式以及对日志记录上隐私相关字段的脱敏。
# 职责：
# - PrivacyFilter：在 RuntimeConfig.mask_sensitive_fields 为真时，将记录上的敏感属性替换为掩码
# - configure_logging(...)：设置根 logger 的级别与格式，只挂载一次 PrivacyFilter
# - get_logger(...)：返回具名 logger，首次使用时完成初始化并挂载过滤器
# 约定：
# - 级别来源依次为：显式参数、RAPPOR_LOG_LEVEL 环境变量、RuntimeConfig.log_level
# - 编码流水线把原始值与中间位向量放在 extra= 字段中，消息文本不含原始值

from __future__ import annotations

import logging
import os
from typing import Iterable, Optional, Tuple

from .config import get_config

LOG_FORMAT = "[%(levelname)s] %(name)s %(asctime)s | %(message)s"

# 原始值、Bloom 与 PRR 均可推回真实数据；IRR 即上报内容，不在此列
SENSITIVE_ATTRIBUTES: Tuple[str, ...] = ("value", "bloom", "prr", "user_id", "secret", "payload")


class PrivacyFilter(logging.Filter):
    """Replace sensitive record attributes with a mask when masking is enabled."""

    def __init__(self, attributes: Iterable[str] = SENSITIVE_ATTRIBUTES, mask: str = "***"):
        super().__init__()
        self.attributes = tuple(attributes)
        self.mask = mask

    def filter(self, record: logging.LogRecord) -> bool:
        # 每条记录实时读取配置，运行期切换开关立即生效；过滤器从不丢弃记录
        if get_config().mask_sensitive_fields:
            for attr in self.attributes:
                if attr in record.__dict__:
                    record.__dict__[attr] = self.mask
        return True


def _attach_filter(target: logging.Filterer) -> None:
    if not any(isinstance(f, PrivacyFilter) for f in target.filters):
        target.addFilter(PrivacyFilter())


def configure_logging(level: Optional[str] = None) -> None:
    resolved = level or os.environ.get("RAPPOR_LOG_LEVEL") or get_config().log_level
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    _attach_filter(logging.getLogger())


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        configure_logging()
    # 根 logger 的过滤器不作用于子 logger 产生并向上传播的记录，具名 logger 需要单独挂载
    _attach_filter(logger)
    return logger
