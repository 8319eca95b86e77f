from pydantic_settings import BaseSettings, SettingsConfigDict
class Settings(BaseSettings):
    APP_ENV: str = "dev"
    DB_URL: str = "sqlite:///./ironshop.db"
    TZ: str = "Asia/Kolkata"
    LOG_LEVEL: str = "INFO"
    # READY queue groups this society's deliveries block by block
    DISTINGUISHED_SOCIETY: str = "PSR Aster"
    BLOCK_RANKS: dict[str, int] = {"A": 0, "B": 1, "C": 2, "D": 3, "E": 4, "F": 5, "G": 6}
    DEFAULT_DISCOUNT_PERCENT: int = 10
    DISCOUNT_OPTIONS: list[int] = [0, 5, 10, 20]
    WORKERS: list[str] = ["Anil", "Sikandar"]
    TOP_CUSTOMERS_LIMIT: int = 3
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
settings = Settings()
