"""Protocols the hook depends on; adapters provide the implementations."""

from __future__ import annotations

from .broker import BrokerChannelPort, BrokerClientPort, BrokerConnectionPort, Publishing
from .formatter import FormatterPort
from .hook import HookPort

__all__ = [
    "BrokerChannelPort",
    "BrokerClientPort",
    "BrokerConnectionPort",
    "FormatterPort",
    "HookPort",
    "Publishing",
]
