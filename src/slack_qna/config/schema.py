"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.message import ListenOptions, Reactions


class ReactionsConfig(BaseModel):
    """Reaction emoji names; null disables a step."""

    loading: str | None = "thinking_face"
    success: str | None = "white_check_mark"
    failed: str | None = "x"

    @field_validator("loading", "success", "failed")
    @classmethod
    def strip_colons(cls, v: str | None) -> str | None:
        """Accept ``:emoji:`` as well as ``emoji``."""
        if v is None:
            return None
        return v.strip().strip(":") or None

    def to_reactions(self) -> Reactions:
        return Reactions(loading=self.loading, success=self.success, failed=self.failed)


class SlackConfig(BaseModel):
    """Slack-specific configuration."""

    bot_token: str
    app_token: str
    bot_user_id: str
    reactions: ReactionsConfig = ReactionsConfig()

    @field_validator("bot_token")
    @classmethod
    def validate_bot_token(cls, v: str) -> str:
        """Validate Slack bot token format."""
        if not v.startswith("xoxb-"):
            raise ValueError("Bot token must start with xoxb-")
        return v

    @field_validator("app_token")
    @classmethod
    def validate_app_token(cls, v: str) -> str:
        """Validate Slack app token format."""
        if not v.startswith("xapp-"):
            raise ValueError("App token must start with xapp-")
        return v

    @field_validator("bot_user_id")
    @classmethod
    def validate_bot_user_id(cls, v: str) -> str:
        """Validate the bot's own Slack user ID."""
        v = v.strip()
        if not v:
            raise ValueError("Bot user ID must not be empty")
        return v


class ListenConfig(BaseModel):
    """Which inbound event kinds to listen for."""

    command: bool = False
    mention: bool = True
    direct_message: bool = True

    def to_options(self) -> ListenOptions:
        return ListenOptions(
            command=self.command,
            mention=self.mention,
            direct_message=self.direct_message,
        )


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("/var/log/slack-qna/slack-qna.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["line", "json", "console"] = "line"
    file: FileLoggingConfig = FileLoggingConfig()


class SlackQnaConfig(BaseSettings):
    """Root configuration for slack-qna."""

    slack: SlackConfig
    listen: ListenConfig = Field(default_factory=ListenConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
    )
