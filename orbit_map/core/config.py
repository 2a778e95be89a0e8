from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    MAP_PATH: str = "map_data.txt"
    ROOT_IDENTIFIER: str = "COM"
    STARTING_DEPTH: int = Field(default=1, ge=0)
    ALLOW_ORPHANS: bool = False
    LOG_LEVEL: str = "INFO"

    # This tells Pydantic to read from the .env file
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create a single instance of the settings to use everywhere
settings = Settings()
