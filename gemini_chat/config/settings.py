"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置。

Gemini API Key 可来自两个变量：
- VITE_GEMINI_API_KEY: 通常写在本地 .env 文件中（优先）。
- GEMINI_API_KEY: 操作系统环境变量。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


API_KEY_ENV_VARS = ("VITE_GEMINI_API_KEY", "GEMINI_API_KEY")


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("AGENT_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class PydanticSettings(BaseSettings):
    """配置设置（使用 Pydantic）。"""

    # ---- Provider 相关配置 ----
    default_provider: str = Field(
        default="gemini",
        description="默认使用的 Provider 名称",
    )
    default_model: str = Field(
        default="chat",
        description="逻辑模型名，由 registry 映射为具体厂商模型",
    )

    # Gemini
    # 两个来源各占一个字段，VITE_GEMINI_API_KEY 不论来自环境变量还是 .env 都优先
    vite_gemini_api_key: Optional[str] = Field(
        default=None,
        description="Gemini API 密钥（VITE_GEMINI_API_KEY，通常写在 .env 中）",
    )
    gemini_api_key: Optional[str] = Field(
        default=None,
        description="Gemini API 密钥（GEMINI_API_KEY）；解析后为最终生效的密钥",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Gemini API 基础URL",
    )
    http_timeout: float = Field(default=60.0, ge=1.0, description="HTTP 超时时间（秒）")

    # ---- 日志 ----
    log_dir: str = Field(default="logs", description="日志目录")
    log_level: str = Field(default="INFO", description="日志级别")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("vite_gemini_api_key", "gemini_api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            v = v.strip()
        if v and len(v) < 10:
            raise ValueError("API key seems too short")
        return v or None

    @model_validator(mode="after")
    def resolve_api_key(self) -> "PydanticSettings":
        # 与前端一致：VITE_GEMINI_API_KEY || GEMINI_API_KEY
        if self.vite_gemini_api_key:
            self.gemini_api_key = self.vite_gemini_api_key
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = PydanticSettings()
