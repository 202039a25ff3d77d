from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # LLM provider: "openai" or "anthropic"
    llm_provider: str = "openai"

    # OpenAI
    openai_api_key: str = ""
    openai_base_url: str | None = None

    # Anthropic
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"

    # Itinerary synthesis
    itinerary_model: str = "gpt-4o"
    itinerary_temperature: float = 0.7
    default_trip_days: int = 3

    # Preference extraction
    extraction_model: str = "gpt-4"
    extraction_temperature: float = 0.3

    # Chat
    chat_model: str = "gpt-4o"
    chat_temperature: float = 0.7
    chat_max_tokens: int = 300
    chat_history_limit: int = 10

    # Amadeus
    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_base_url: str = "https://test.api.amadeus.com"

    # Flight search
    flight_currency: str = "USD"
    flight_default_adults: int = 1
    flight_default_max: int = 10
    flight_search_cache_ttl: int = 300  # 5 minutes

    # Search cache: "memory" or "redis"
    search_cache_backend: str = "memory"
    redis_url: str = "redis://localhost:6379/0"

    # CORS
    cors_origins: str = "http://localhost:5173"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
