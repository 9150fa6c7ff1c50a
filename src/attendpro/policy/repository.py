from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .model import SystemConfig


class ConfigProvider(Protocol):
    def get_system_config(self) -> SystemConfig:
        raise NotImplementedError


@dataclass
class StaticConfigProvider:
    """Fixed configuration (tests, one-off CLI runs)."""

    config: SystemConfig = field(default_factory=SystemConfig)

    def get_system_config(self) -> SystemConfig:
        return self.config
