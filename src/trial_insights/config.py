"""Configuration management for Trial Insights"""
from __future__ import annotations
import os
from dataclasses import dataclass
from dotenv import load_dotenv
load_dotenv()

@dataclass(frozen = True)
class Settings:
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    ollama_model: str = os.getenv("OLLAMA_MODEL", "gemma3:4b")
    max_tokens: int = int(os.getenv("NUM_PREDICT", "512"))
    request_timeout: float = float(os.getenv("LLM_TIMEOUT", "120"))

    ## llm decoding defaults
    temperature: float = float(os.getenv("TEMPERATURE", "0.2"))
    top_p: float = float(os.getenv("TOP_P", "0.9"))
    num_ctx: int = int(os.getenv("NUM_CTX", "8192"))

    # Token budget settings (prompt guard)
    max_prompt_tokens: int = int(os.getenv("MAX_PROMPT_TOKENS", "6000"))
    chars_per_token: float = float(os.getenv("CHARS_PER_TOKEN", "3.5"))

    # Records serialized into a cohort summary prompt
    summary_max_records: int = int(os.getenv("SUMMARY_MAX_RECORDS", "10"))

    # Optional JSON file replacing the built-in seed records
    trial_data_file: str = os.getenv("TRIAL_DATA_FILE", "")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))

SETTINGS = Settings()
