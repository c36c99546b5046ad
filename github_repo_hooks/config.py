from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_TOKEN: str = ""
    GITHUB_API_VERSION: str = "2022-11-28"
    GITHUB_USER_AGENT: str = "github-repo-hooks"
    GITHUB_TIMEOUT: float = 30.0
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
