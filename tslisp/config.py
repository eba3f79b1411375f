"""
Runtime settings for the TSLisp shell and sandbox.

Values come from ``TSLISP_*`` environment variables (or a ``.env`` file).
The compiler core never imports this module; callers pass what it needs.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TSLISP_",
        env_file=".env",
        extra="ignore",
    )

    # Object that definitions are written into by generated code.
    SLOT_NAMESPACE: str = "global"

    NODE_BINARY: str = "node"
    SANDBOX_TIMEOUT: int = 30
    SANDBOX_MAX_OUTPUT_KB: int = 100

    REPL_PROMPT: str = "> "
    REPL_ECHO: bool = True

    LOG_LEVEL: str = "WARNING"
    PARSE_DEBUG: bool = False


settings = Settings()
