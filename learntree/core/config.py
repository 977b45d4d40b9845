from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="learntree", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=9000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class StudySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    session_size: int = Field(default=25, alias="STUDY_SESSION_SIZE")
    history_limit: int = Field(default=100, alias="HISTORY_LIMIT")
    root_name: str = Field(default="My Knowledge", alias="ROOT_NAME")
    exported_by: str = Field(default="Learning Tracker", alias="EXPORTED_BY")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    study: StudySettings = Field(default_factory=lambda: StudySettings())


settings = Settings()
