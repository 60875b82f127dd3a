from .logging import LoggerFactoryProtocol, LoggerLikeProtocol
from .text import BlockCallbackProtocol, CustomReplaceCallbackProtocol, SegmentTransformProtocol

__all__ = [
    'BlockCallbackProtocol',
    'CustomReplaceCallbackProtocol',
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
    'SegmentTransformProtocol',
]
