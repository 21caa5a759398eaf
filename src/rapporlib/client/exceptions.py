"""Exception types raised by the RAPPOR client encoder."""
# 说明：RAPPOR 客户端编码器的异常类型定义。
# 职责：
# - RapporError：客户端编码相关错误的公共基类
# - InvalidEncoderError：在配置无效（validity 标志为 False）的编码器上调用 encode 的前置条件违例
# - SerializationError：输出缓冲区或位宽不匹配导致无法完成字节序列化

from __future__ import annotations


class RapporError(Exception):
    """Base class for encoder errors."""


class InvalidEncoderError(RapporError):
    """Raised when encode is called on an encoder whose configuration is invalid."""


class SerializationError(RapporError):
    """Raised when a bit vector cannot be written into the requested byte layout."""
