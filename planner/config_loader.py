import yaml
import os
from typing import Optional, Literal
from pydantic import BaseModel, Field


class WeightsConfig(BaseModel):
    """Default ranking weights (competence, availability, growth, continuity)."""
    alpha: float = Field(default=0.3, ge=0)
    beta: float = Field(default=0.3, ge=0)
    gamma: float = Field(default=0.2, ge=0)
    delta: float = Field(default=0.2, ge=0)


class RankingConfig(BaseModel):
    """
    Configuration for owner ranking.

    strategy selects the ranker the pipeline uses; the local heuristic is
    always available as an explicit fallback.
    """
    strategy: Literal["local", "llm"] = "local"
    fallback_to_local: bool = True

    # "A very available member has >= 16 free hours this sprint"
    availability_reference_hours: float = Field(default=16.0, gt=0)
    max_justifications: int = Field(default=5, ge=1)

    # Raise instead of skipping when an LLM ranking names an unknown member
    strict_member_references: bool = False

    # Pause between sequential LLM ranking calls to stay under rate limits
    inter_request_delay_seconds: float = Field(default=1.5, ge=0)


class LlmConfig(BaseModel):
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    ranking_model: str = "gpt-4o-mini"
    temperature: float = 0.2
    max_tokens: int = 800
    max_attempts: int = Field(default=3, ge=1)


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class AppConfig(BaseModel):
    weights: WeightsConfig = Field(default_factory=WeightsConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    llm: LlmConfig = Field(default_factory=LlmConfig)
    web: WebConfig = Field(default_factory=WebConfig)


def _apply_env_overrides(data: dict) -> dict:
    # Allow env var override for LLM connection settings
    env_llm_base_url = os.environ.get("LLM_BASE_URL")
    if env_llm_base_url:
        data.setdefault('llm', {})['base_url'] = env_llm_base_url

    env_api_key = os.environ.get("LLM_API_KEY") or os.environ.get("OPENAI_API_KEY")
    if env_api_key and not (data.get('llm') or {}).get('api_key'):
        data.setdefault('llm', {})['api_key'] = env_api_key

    env_strategy = os.environ.get("RANKING_STRATEGY")
    if env_strategy:
        data.setdefault('ranking', {})['strategy'] = env_strategy

    # Web server overrides
    if 'WEB_HOST' in os.environ:
        data.setdefault('web', {})['host'] = os.environ['WEB_HOST']
    if 'WEB_PORT' in os.environ:
        data.setdefault('web', {})['port'] = int(os.environ['WEB_PORT'])

    return data


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from another directory), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    for section in ('weights', 'ranking', 'llm', 'web'):
        if data.get(section) is None:
            data.pop(section, None)

    return AppConfig(**_apply_env_overrides(data))
