"""
Configuration settings for vimflow.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (VIMFLOW_*)."""

    model_config = SettingsConfigDict(
        env_prefix="VIMFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Monitoring
    # ========================================
    poll_interval_seconds: float = Field(
        default=0.1,
        gt=0,
        description="Delay between two editor samples",
    )

    # ========================================
    # Editor state sources
    # ========================================
    status_file: Path = Field(
        default=Path("/tmp/vim_continuous_status.json"),
        description="Status record written by the editor's status script",
    )
    nvim_socket: str | None = Field(
        default=None,
        description="Neovim --listen socket; when set, sample over remote-expr instead",
    )
    nvim_binary: str = Field(
        default="nvim",
        description="Neovim executable used for remote-expr queries",
    )

    # ========================================
    # Display
    # ========================================
    progress_file: Path = Field(
        default=Path("/tmp/vim_continuous_progress.txt"),
        description="File receiving the progress token (next goal number or 'completed')",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional debug log file (always DEBUG level)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
