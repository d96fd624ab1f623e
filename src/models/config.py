"""
Configuration models

Immutable dataclasses built from the YAML configuration. Each model validates
itself in __post_init__ and raises ValueError on bad values, which makes
ConfigManager fall back to factory defaults.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from models.enums import LogLevel


def _known_fields(cls, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Keep only keys the dataclass knows (YAML sections may carry comments/extras)"""
    if not data:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{cls.__name__} section must be a mapping, got {type(data).__name__}")
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


@dataclass(frozen=True)
class GlitchConfig:
    """Glitch text animator settings"""
    frames_per_cell: int = 3
    alphabet: str = "1234567890:"
    tick_delay_ms: int = 33
    start_delay_ms: int = 1000

    def __post_init__(self):
        if self.frames_per_cell < 1:
            raise ValueError(f"frames_per_cell must be >= 1, got {self.frames_per_cell}")
        if not self.alphabet:
            raise ValueError("alphabet must not be empty")
        if self.tick_delay_ms <= 0:
            raise ValueError(f"tick_delay_ms must be > 0, got {self.tick_delay_ms}")
        if self.start_delay_ms < 0:
            raise ValueError(f"start_delay_ms must be >= 0, got {self.start_delay_ms}")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GlitchConfig":
        values = _known_fields(cls, data)
        if "alphabet" in values:
            values["alphabet"] = str(values["alphabet"])
        return cls(**values)


@dataclass(frozen=True)
class WatchFaceConfig:
    """
    Watch face draw loop settings

    The glitch animation re-triggers when
    second % trigger_second_modulo == trigger_second and at least cooldown_ms
    passed since the previous run completed.
    """
    interactive_update_ms: int = 1000
    cooldown_ms: int = 5000
    trigger_second_modulo: int = 10
    trigger_second: int = 9

    def __post_init__(self):
        if self.interactive_update_ms <= 0:
            raise ValueError(f"interactive_update_ms must be > 0, got {self.interactive_update_ms}")
        if self.cooldown_ms < 0:
            raise ValueError(f"cooldown_ms must be >= 0, got {self.cooldown_ms}")
        if self.trigger_second_modulo < 1:
            raise ValueError(f"trigger_second_modulo must be >= 1, got {self.trigger_second_modulo}")
        if not 0 <= self.trigger_second < self.trigger_second_modulo:
            raise ValueError(
                f"trigger_second must be in [0, {self.trigger_second_modulo}), got {self.trigger_second}"
            )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "WatchFaceConfig":
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class APIConfig:
    """HTTP control/preview API settings"""
    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 8000

    def __post_init__(self):
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be in 1..65535, got {self.port}")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "APIConfig":
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class LoggingConfig:
    """Console logger settings"""
    level: LogLevel = LogLevel.INFO
    use_colors: bool = True

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LoggingConfig":
        values = _known_fields(cls, data)
        if "level" in values:
            level = values["level"]
            if not isinstance(level, LogLevel):
                try:
                    values["level"] = LogLevel[str(level).upper()]
                except KeyError:
                    raise ValueError(f"Unknown log level: {level}")
        return cls(**values)
