"""
全局配置

配置以 YAML 文件保存，由 pydantic 模型校验。默认路径可通过环境变量 CMDGATE_CONFIG 指定，
文件不存在时使用内置默认值。
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, TypedDict, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from typing_extensions import Unpack

from .error import CmdGateConfigError
from .logger import get_log, set_log_level

LOG = get_log("Config")

CONFIG_ENV = "CMDGATE_CONFIG"
DEFAULT_CONFIG_PATH = "config.yaml"
SPIGOT_UPDATE_API = "https://api.spigotmc.org/legacy/update.php?resource={resource_id}"


class UpdateCheckConfig(BaseModel):
    """更新检查配置"""

    enabled: bool = True
    api_url: str = SPIGOT_UPDATE_API
    timeout: float = 10.0
    prefix: str = "&8[&eRocketUpdater&8]"

    @field_validator("api_url")
    def _need_placeholder(cls, v: str) -> str:
        if "{resource_id}" not in v:
            raise ValueError("api_url 必须包含 {resource_id} 占位符")
        return v


class CmdGateConfig(BaseModel):
    """cmdgate 配置项"""

    debug: bool = False
    log_level: str = "INFO"
    color_marker: str = "&"
    command_prefixes: List[str] = Field(default_factory=lambda: ["/"])
    default_permission_message: str = "&cYou don't have permission to do this."
    unknown_subcommand_message: str = "&cUnknown subcommand. &7Use &e/{command} &7for help."
    usage_message: str = "&7Usage: &e/{command} <{subcommands}>"
    update_check: UpdateCheckConfig = Field(default_factory=UpdateCheckConfig)

    @field_validator("color_marker")
    def _single_char(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("color_marker 必须是单个字符")
        return v

    @field_validator("log_level")
    def _upper_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"未知日志级别: {v}")
        return v

    # -------------------------------------------------------------------------
    # 运行期修改
    # -------------------------------------------------------------------------

    def update_value(self, key: str, value: Any) -> None:
        """更新单个配置项，键不存在时抛出 CmdGateConfigError"""
        if key not in type(self).model_fields:
            raise CmdGateConfigError(f"未知配置项: {key}")
        data = self.model_dump()
        data[key] = value
        try:
            validated = type(self).model_validate(data)
        except ValidationError as e:
            raise CmdGateConfigError(f"{key} 的取值不合法: {e}") from e
        setattr(self, key, getattr(validated, key))
        LOG.debug(f"配置项 {key} 已更新为 {value!r}")

    def update(self, **kwargs: Unpack["ConfigArgs"]) -> None:
        """批量更新配置项"""
        for key, value in kwargs.items():
            if key not in LEGAL_ARGS:
                raise CmdGateConfigError(f"非法配置参数: {key}")
            if value is not None:
                self.update_value(key, value)
        self.validate_config()

    def validate_config(self) -> None:
        """校验配置并应用日志级别"""
        if not self.command_prefixes:
            LOG.warning("未配置命令前缀，命令必须以名称直接开头")
        set_log_level("DEBUG" if self.debug else self.log_level)


class ConfigArgs(TypedDict, total=False):
    """可运行期覆盖的配置项"""

    debug: Optional[bool]
    log_level: Optional[str]
    color_marker: Optional[str]
    command_prefixes: Optional[List[str]]
    default_permission_message: Optional[str]
    unknown_subcommand_message: Optional[str]
    usage_message: Optional[str]


LEGAL_ARGS = ConfigArgs.__annotations__.keys()


def load_config(path: Optional[Union[str, Path]] = None) -> CmdGateConfig:
    """
    从 YAML 文件加载配置

    Args:
        path: 配置文件路径，None 时读取环境变量 CMDGATE_CONFIG，再退回 config.yaml

    Returns:
        校验后的配置对象；文件不存在时返回默认配置
    """
    config_path = Path(path or os.environ.get(CONFIG_ENV, DEFAULT_CONFIG_PATH))
    if not config_path.exists():
        LOG.debug(f"配置文件 {config_path} 不存在，使用默认配置")
        return CmdGateConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw: Dict[str, Any] = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise CmdGateConfigError(f"无法解析 {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise CmdGateConfigError(f"{config_path} 顶层必须是映射")

    try:
        loaded = CmdGateConfig.model_validate(raw)
    except ValidationError as e:
        raise CmdGateConfigError(f"{config_path} 校验失败: {e}") from e
    LOG.info(f"已从 {config_path} 加载配置")
    return loaded


cmdgate_config = load_config()
