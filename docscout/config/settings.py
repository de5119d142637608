from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    enabled_sources: list[str] = ["apple-docs", "hackingwithswift"]
    max_results_per_source: int = 10

    cache_ttl_seconds: float = 3600
    http_timeout_seconds: float = 15

    rerank_enabled: bool = True
    rerank_max_results: int = 20
    rerank_max_tokens: int = 6000
    rerank_truncate_words: int = 50

    # keyword | llm | cross-encoder
    scorer: str = "keyword"

    llm_base_url: str = "http://localhost:11434/v1"
    llm_model: str = "qwen2.5:7b"
    llm_max_tokens: int = 1024
    llm_temperature: float = 0.1

    cross_encoder_model: str = "BAAI/bge-reranker-v2-m3"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
