"""Configuration management for the Prism study guide service.

This module provides centralized configuration for all service components.
Runtime settings are loaded from environment variables with sensible defaults;
heuristic tuning constants live in frozen settings objects that are passed
explicitly into the processing functions.

Environment Variables:
    LLM Access:
        OPENROUTER_API_KEY: OpenRouter API key (optional - without it every
            summary is produced by the heuristic fallback)
        OPENROUTER_BASE_URL: OpenAI-compatible endpoint (default: OpenRouter)
        SUMMARY_MODELS: Comma-separated model identifiers, tried in order
        APP_URL: Sent as HTTP-Referer for app identification
        APP_TITLE: Sent as X-Title for app identification

    Server:
        HOST: Bind address (default: 127.0.0.1)
        PORT: Listen port (default: 3000)
        MAX_URLS: Maximum URLs per multi-article request (default: 10)

    Wikipedia Fetching:
        WIKIPEDIA_TIMEOUT: Per-request timeout in seconds
        MAX_RETRIES: Attempts for transient fetch failures
        RETRY_BASE_DELAY: Base delay for exponential backoff (seconds)
        MAX_WORKERS: Maximum concurrent article fetches per request

    Optional Features:
        ENABLE_LOGFIRE: Enable Logfire/OpenTelemetry tracing
        LOGFIRE_TOKEN: Logfire authentication token

    Logging:
        LOG_DIR: Directory for log files
        LOG_LEVEL: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_BACKUP_COUNT: Number of rotated log files to keep
        LOG_MAX_BYTES: Max log file size in bytes (0 = time-based rotation)
        LOG_FORMAT: Log format ('text' or 'json' for structured logging)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _env(key: str, default: str = "") -> str:
    """Get string environment variable with optional default."""
    return os.environ.get(key, default)


def _env_int(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Raises:
        ValueError: If value is set but cannot be parsed as integer
    """
    val = os.environ.get(key)
    if not val:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"Invalid integer value for {key}: '{val}'")


def _env_float(key: str, default: float) -> float:
    """Get float environment variable with default.

    Raises:
        ValueError: If value is set but cannot be parsed as float
    """
    val = os.environ.get(key)
    if not val:
        return default
    try:
        return float(val)
    except ValueError:
        raise ValueError(f"Invalid float value for {key}: '{val}'")


def _env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable with default.

    Recognizes truthy values: '1', 'true', 'yes', 'on'
    Recognizes falsy values: '0', 'false', 'no', 'off'
    """
    val = os.environ.get(key, "").lower()
    if val in ("1", "true", "yes", "on"):
        return True
    if val in ("0", "false", "no", "off"):
        return False
    return default


def _env_list(key: str, default: list[str]) -> list[str]:
    """Get comma-separated list environment variable with default."""
    val = os.environ.get(key, "")
    items = [item.strip() for item in val.split(",") if item.strip()]
    return items or list(default)


# Free-tier OpenRouter models, in priority order
DEFAULT_SUMMARY_MODELS = [
    "mistralai/mistral-small-3.2-24b-instruct:free",  # Primary
    "microsoft/phi-3.5-mini-instruct:free",
    "meta-llama/llama-3.2-3b-instruct:free",
    "qwen/qwen-2.5-coder-32b-instruct:free",
]

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


@dataclass(frozen=True)
class BudgetSettings:
    """Token and word budget limits for multi-article summaries.

    Attributes:
        token_cap: Hard limit on tokens for any single summarization call
        base_token_multiplier: Minimum scale-up applied to multi-article budgets
        cluster_token_factor: Additional scale per semantic cluster
        min_tokens_per_cluster: Floor for a single cluster's token budget
        min_words_per_cluster: Floor for a single cluster's target words
        multi_min_words: Floor for the lower bound of a multi-article word target
        multi_max_words: Floor for the upper bound of a multi-article word target
        min_word_scale: Per-cluster scale for the lower word bound
        max_word_scale: Per-cluster scale for the upper word bound
    """

    token_cap: int = 1200
    base_token_multiplier: float = 1.2
    cluster_token_factor: float = 0.3
    min_tokens_per_cluster: int = 120
    min_words_per_cluster: int = 100
    multi_min_words: int = 300
    multi_max_words: int = 500
    min_word_scale: float = 0.7
    max_word_scale: float = 0.8


@dataclass(frozen=True)
class OptimizationSettings:
    """Thresholds for content optimization and clustering.

    Attributes:
        related_threshold: Minimum similarity to group articles together
        max_input_length: Maximum characters per article after optimization
        summary_input_length: Characters of content passed to a summary prompt
        short_section_length: Section bodies shorter than this get regenerated
        budget: Budget allocation limits
    """

    related_threshold: float = 0.3
    max_input_length: int = 8000
    summary_input_length: int = 6000
    short_section_length: int = 80
    budget: BudgetSettings = field(default_factory=BudgetSettings)


DEFAULT_OPTIMIZATION = OptimizationSettings()


@dataclass
class Config:
    """Application configuration loaded from environment variables.

    All settings can be overridden via environment variables. Use Config.load()
    to create an instance with values from the environment.

    Example:
        >>> config = Config.load()
        >>> if error := config.validate():
        ...     print(f"Config error: {error}")
    """

    # === LLM Access ===
    openrouter_api_key: str = ""  # OPENROUTER_API_KEY
    openrouter_base_url: str = OPENROUTER_BASE_URL  # OPENROUTER_BASE_URL
    summary_models: list[str] = field(default_factory=lambda: DEFAULT_SUMMARY_MODELS.copy())
    app_url: str = "https://localhost:3000"  # APP_URL - HTTP-Referer header
    app_title: str = "AI Wikipedia Summarizer"  # APP_TITLE - X-Title header

    # === Server ===
    host: str = "127.0.0.1"  # HOST
    port: int = 3000  # PORT
    max_urls: int = 10  # MAX_URLS - URLs per multi-article request

    # === Wikipedia Fetching ===
    wikipedia_timeout: float = 30.0  # WIKIPEDIA_TIMEOUT - seconds per HTTP call
    max_retries: int = 3  # MAX_RETRIES - attempts for transient failures
    retry_base_delay: float = 1.0  # RETRY_BASE_DELAY - exponential backoff base
    max_workers: int = 4  # MAX_WORKERS - concurrent fetches per request

    # === Heuristics ===
    optimization: OptimizationSettings = field(default_factory=OptimizationSettings)

    # === Output Directories ===
    log_dir: Path = field(default_factory=lambda: Path("log"))  # LOG_DIR

    # === Logging Configuration ===
    log_level: str = "INFO"  # LOG_LEVEL - DEBUG, INFO, WARNING, ERROR
    log_backup_count: int = 30  # LOG_BACKUP_COUNT - Number of rotated logs to keep
    log_max_bytes: int = 0  # LOG_MAX_BYTES - Max file size (0 = time-based rotation)
    log_format: str = "text"  # LOG_FORMAT - 'text' or 'json' for structured logging

    # === Optional: Observability ===
    enable_logfire: bool = False  # ENABLE_LOGFIRE - Enable distributed tracing
    logfire_token: str = ""  # LOGFIRE_TOKEN - Authentication token

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            openrouter_api_key=_env("OPENROUTER_API_KEY"),
            openrouter_base_url=_env("OPENROUTER_BASE_URL", OPENROUTER_BASE_URL),
            summary_models=_env_list("SUMMARY_MODELS", DEFAULT_SUMMARY_MODELS),
            app_url=_env("APP_URL", "https://localhost:3000"),
            app_title=_env("APP_TITLE", "AI Wikipedia Summarizer"),
            host=_env("HOST", "127.0.0.1"),
            port=_env_int("PORT", 3000),
            max_urls=_env_int("MAX_URLS", 10),
            wikipedia_timeout=_env_float("WIKIPEDIA_TIMEOUT", 30.0),
            max_retries=_env_int("MAX_RETRIES", 3),
            retry_base_delay=_env_float("RETRY_BASE_DELAY", 1.0),
            max_workers=_env_int("MAX_WORKERS", 4),
            log_dir=Path(_env("LOG_DIR", "log")),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            log_backup_count=_env_int("LOG_BACKUP_COUNT", 30),
            log_max_bytes=_env_int("LOG_MAX_BYTES", 0),
            log_format=_env("LOG_FORMAT", "text").lower(),
            enable_logfire=_env_bool("ENABLE_LOGFIRE", False),
            logfire_token=_env("LOGFIRE_TOKEN"),
        )

    @property
    def llm_enabled(self) -> bool:
        """Whether any external model can be called."""
        return bool(self.openrouter_api_key and self.summary_models)

    def validate(self) -> str | None:
        """Validate configuration values.

        A missing OPENROUTER_API_KEY is not an error: the service then runs
        in heuristic-only mode.

        Returns:
            Error message string if invalid, None if valid.
        """
        if not 0 < self.port < 65536:
            return f"Invalid PORT {self.port} - must be between 1 and 65535"
        if self.max_urls <= 0:
            return "MAX_URLS must be positive"
        if self.wikipedia_timeout <= 0:
            return "WIKIPEDIA_TIMEOUT must be positive"
        if self.max_retries < 1:
            return "MAX_RETRIES must be at least 1"
        if self.retry_base_delay < 0:
            return "RETRY_BASE_DELAY must be non-negative"
        if self.max_workers <= 0:
            return "MAX_WORKERS must be positive"
        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return f"Invalid LOG_LEVEL '{self.log_level}' - must be DEBUG, INFO, WARNING, ERROR, or CRITICAL"
        if self.log_format not in ("text", "json"):
            return f"Invalid LOG_FORMAT '{self.log_format}' - must be 'text' or 'json'"
        if self.log_backup_count < 0:
            return "LOG_BACKUP_COUNT must be non-negative"
        if self.log_max_bytes < 0:
            return "LOG_MAX_BYTES must be non-negative"
        return None
