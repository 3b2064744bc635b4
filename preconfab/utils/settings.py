"""Settings of the pre-configured top module generator.

Naming conventions of the generated netlist can be overridden through environment
variables prefixed with ``PRECONFAB_`` or through ``.env`` files.
"""

from pathlib import Path

from loguru import logger
from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from preconfab.model.define import (
    CONFIGURATION_CHAIN_DATA_OUT_NAME,
    DEFAULT_SIGNAL_INIT_VALUE,
    DEFINES_VERILOG_FILE_NAME,
    DEFINES_VERILOG_SIMULATION_FILE_NAME,
    FABRIC_TOP_MODULE_NAME,
    FORMAL_VERIFICATION_TOP_MODULE_PORT_POSTFIX,
    FORMAL_VERIFICATION_TOP_MODULE_POSTFIX,
    FORMAL_VERIFICATION_TOP_MODULE_UUT_NAME,
    HIERARCHY_SEPARATOR,
)

META_DATA_DIR = ".preconfab"


class PreconfabSettings(BaseSettings):
    """preconfab settings.

    ``include_files`` defaults to the fabric defines and simulation defines netlists
    found in ``verilog_dir``, which itself defaults to the project directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="PRECONFAB_",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    proj_dir: Path = Path.cwd()
    verilog_dir: Path | None = None
    include_files: list[Path] | None = None

    fabric_top_name: str = FABRIC_TOP_MODULE_NAME
    instance_name: str = FORMAL_VERIFICATION_TOP_MODULE_UUT_NAME
    module_postfix: str = FORMAL_VERIFICATION_TOP_MODULE_POSTFIX
    port_postfix: str = FORMAL_VERIFICATION_TOP_MODULE_PORT_POSTFIX
    config_chain_out_name: str = CONFIGURATION_CHAIN_DATA_OUT_NAME
    hierarchy_separator: str = HIERARCHY_SEPARATOR
    default_io_value: int = DEFAULT_SIGNAL_INIT_VALUE

    @field_validator("verilog_dir", mode="before")
    @classmethod
    def default_verilog_dir(
        cls, value: str | Path | None, info: ValidationInfo
    ) -> Path:
        """Fall back to the project directory when no netlist directory is set."""
        if value in (None, ""):
            return Path(info.data.get("proj_dir", Path.cwd()))
        return Path(value)

    @field_validator("include_files", mode="before")
    @classmethod
    def default_include_files(
        cls, value: list[str | Path] | str | None, info: ValidationInfo
    ) -> list[Path]:
        """Resolve the netlists included by the generated wrapper.

        Accepts a list of paths or a comma separated string.
        """
        if value is None:
            verilog_dir = Path(info.data.get("verilog_dir") or Path.cwd())
            return [
                verilog_dir / DEFINES_VERILOG_FILE_NAME,
                verilog_dir / DEFINES_VERILOG_SIMULATION_FILE_NAME,
            ]
        if isinstance(value, str):
            return [Path(v.strip()) for v in value.split(",") if v.strip()]
        return [Path(v) for v in value]

    @field_validator("default_io_value", mode="after")
    @classmethod
    def is_bit(cls, value: int) -> int:
        """Check that the default I/O value is a single bit."""
        if value not in (0, 1):
            raise ValueError(f"default_io_value must be 0 or 1, got {value}")
        return value

    @field_validator(
        "instance_name", "fabric_top_name", "config_chain_out_name", mode="after"
    )
    @classmethod
    def not_empty(cls, value: str) -> str:
        """Check that an identifier is not empty."""
        if not value.strip():
            raise ValueError("Identifier must not be empty")
        return value


# Module-level singleton pattern for settings management
_context_instance: PreconfabSettings | None = None


def init_context(
    project_dir: Path | None = None,
    project_dot_env: Path | None = None,
    **overrides: object,
) -> PreconfabSettings:
    """Initialize the global preconfab context with settings.

    Subsequent calls override the existing context.

    Parameters
    ----------
    project_dir : Path | None, optional
        Project directory. Defaults to the current working directory.
    project_dot_env : Path | None, optional
        User-provided .env file, taking priority over the project one.
    **overrides : object
        Explicit setting values, taking priority over every .env file.

    Returns
    -------
    PreconfabSettings
        The initialized settings instance
    """
    global _context_instance
    env_files: list[Path] = []

    if project_dir is not None and (project_dir / META_DATA_DIR / ".env").exists():
        env_files.append(project_dir / META_DATA_DIR / ".env")

    if project_dot_env is not None:
        if project_dot_env.exists():
            env_files.append(project_dot_env)
        else:
            logger.warning(
                f"Project .env file not found: {project_dot_env} this is ignored"
            )

    if project_dir is not None:
        overrides["proj_dir"] = project_dir
    _context_instance = PreconfabSettings(_env_file=tuple(env_files), **overrides)

    logger.debug("preconfab context initialized")
    return _context_instance


def get_context() -> PreconfabSettings:
    """Get the global preconfab context.

    Returns
    -------
    PreconfabSettings
        The current settings instance

    Raises
    ------
    RuntimeError
        If context has not been initialized with init_context()
    """
    if _context_instance is None:
        raise RuntimeError(
            "preconfab context not initialized. Call init_context() first."
        )
    return _context_instance


def reset_context() -> None:
    """Reset the global context (primarily for testing)."""
    global _context_instance
    _context_instance = None
    logger.debug("preconfab context reset")
