from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_allow_origins: list[str] = ["*"]

    # Effective rate solver: hard stop for the bisection loop
    solver_max_iterations: int = 100

    # Longest term the API accepts (years)
    max_term_years: int = 40

    # Formatting
    currency_suffix: str = "kr"


settings = Settings()
