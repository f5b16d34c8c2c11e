"""Typed settings loader for the serial dashboard."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

TabName = Literal["Welcome", "Monitor", "Console", "Settings"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    tick_rate_ms: int = Field(default=250, alias="TICK_RATE_MS")
    exit_key: str = Field(default="q", alias="EXIT_KEY")
    default_tab: TabName = Field(default="Welcome", alias="DEFAULT_TAB")
    layout_margin: int = Field(default=5, alias="LAYOUT_MARGIN")
    tab_bar_height: int = Field(default=3, alias="TAB_BAR_HEIGHT")
    require_ports: bool = Field(default=False, alias="REQUIRE_PORTS")

    chart_window: int = Field(default=100, alias="CHART_WINDOW")
    random_lower: int = Field(default=0, alias="RANDOM_LOWER")
    random_upper: int = Field(default=100, alias="RANDOM_UPPER")
    random_samples_per_tick: int = Field(default=1, alias="RANDOM_SAMPLES_PER_TICK")
    sin1_interval: float = Field(default=0.2, alias="SIN1_INTERVAL")
    sin1_period: float = Field(default=3.0, alias="SIN1_PERIOD")
    sin1_scale: float = Field(default=18.0, alias="SIN1_SCALE")
    sin2_interval: float = Field(default=0.1, alias="SIN2_INTERVAL")
    sin2_period: float = Field(default=2.0, alias="SIN2_PERIOD")
    sin2_scale: float = Field(default=10.0, alias="SIN2_SCALE")
    sin_samples_per_tick: int = Field(default=5, alias="SIN_SAMPLES_PER_TICK")

    log_level: LogLevel = Field(default="INFO", alias="LOG_LEVEL")
    feed_max_events: int = Field(default=200, alias="FEED_MAX_EVENTS")

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value: Any) -> Any:
        """Accept lower-case level names from the environment."""
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("default_tab", mode="before")
    @classmethod
    def title_default_tab(cls, value: Any) -> Any:
        """Accept `monitor` as well as `Monitor`."""
        if isinstance(value, str):
            return value.strip().capitalize()
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        """Validate numeric ranges and cross-field constraints."""
        if self.tick_rate_ms <= 0:
            raise ValueError("TICK_RATE_MS must be > 0.")
        if len(self.exit_key) != 1:
            raise ValueError("EXIT_KEY must be a single character.")
        if self.layout_margin < 0:
            raise ValueError("LAYOUT_MARGIN must be >= 0.")
        if self.tab_bar_height < 3:
            raise ValueError("TAB_BAR_HEIGHT must be >= 3 to fit a bordered tab bar.")
        if self.chart_window <= 0:
            raise ValueError("CHART_WINDOW must be > 0.")
        if self.random_lower >= self.random_upper:
            raise ValueError("RANDOM_LOWER must be less than RANDOM_UPPER.")
        if self.random_samples_per_tick <= 0:
            raise ValueError("RANDOM_SAMPLES_PER_TICK must be > 0.")
        if self.sin_samples_per_tick <= 0:
            raise ValueError("SIN_SAMPLES_PER_TICK must be > 0.")
        for prefix, interval, period, scale in (
            ("SIN1", self.sin1_interval, self.sin1_period, self.sin1_scale),
            ("SIN2", self.sin2_interval, self.sin2_period, self.sin2_scale),
        ):
            if interval <= 0:
                raise ValueError(f"{prefix}_INTERVAL must be > 0.")
            if period == 0:
                raise ValueError(f"{prefix}_PERIOD must not be 0.")
            if scale < 0:
                raise ValueError(f"{prefix}_SCALE must be >= 0.")
        if self.feed_max_events <= 0:
            raise ValueError("FEED_MAX_EVENTS must be > 0.")
        return self

    @property
    def tick_rate_seconds(self) -> float:
        return self.tick_rate_ms / 1000.0

    def safe_summary(self) -> dict[str, Any]:
        """Return the effective settings shown on the Settings tab."""
        return {
            "tick_rate_ms": self.tick_rate_ms,
            "exit_key": self.exit_key,
            "default_tab": self.default_tab,
            "layout_margin": self.layout_margin,
            "tab_bar_height": self.tab_bar_height,
            "require_ports": self.require_ports,
            "chart_window": self.chart_window,
            "random_range": f"[{self.random_lower}, {self.random_upper})",
            "random_samples_per_tick": self.random_samples_per_tick,
            "sin1": (
                f"interval={self.sin1_interval} period={self.sin1_period} "
                f"scale={self.sin1_scale}"
            ),
            "sin2": (
                f"interval={self.sin2_interval} period={self.sin2_period} "
                f"scale={self.sin2_scale}"
            ),
            "sin_samples_per_tick": self.sin_samples_per_tick,
            "log_level": self.log_level,
        }


def load_settings(**overrides: Any) -> Settings:
    """Load and validate settings, raising ConfigError on failure.

    Keyword overrides (by field name) take precedence over the environment.
    """
    try:
        settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
    return settings
