"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Weather Blog Automator"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"
    service_name: str = "weather-blog"
    log_level: str = "INFO"
    locations_config_path: str = "config/locations.yml"
    # Per-provider request timeouts; httpx defaults to 5s, too short for completions
    weather_api_timeout: float = 10.0
    # Webflow CMS
    webflow_api_url: str = "https://api.webflow.com/v2"
    webflow_api_key: str = ""
    webflow_collection_id: str = ""
    webflow_timeout: float = 30.0
    # OpenRouter chat completions
    openrouter_api_url: str = "https://openrouter.ai/api/v1/chat/completions"
    openrouter_api_key: str = ""
    openrouter_model: str = "mistralai/mistral-7b-instruct:free"
    openrouter_timeout: float = 120.0
    # Resend email; leaving the key unset disables notifications
    resend_api_url: str = "https://api.resend.com/emails"
    resend_api_key: str | None = None
    resend_timeout: float = 10.0
    notification_sender: str = "automation@your-verified-domain.com"
    notification_recipient: str = "editor@example.com"
    notification_subject: str = "New Weather Blog Post Published!"
    # Published site
    site_base_url: str = "https://hamarakhet-7013b6.webflow.io"
    post_path_prefix: str = "/post/"
    live_weather_image_url: str = (
        "https://mausam.imd.gov.in/imd_latest/contents/satellite/satellite_insat3d.jpg"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def missing_credentials(self) -> list[str]:
        """Names of the required credentials that are not configured."""

        required = {
            "WEBFLOW_API_KEY": self.webflow_api_key,
            "WEBFLOW_COLLECTION_ID": self.webflow_collection_id,
            "OPENROUTER_API_KEY": self.openrouter_api_key,
        }
        return [name for name, value in required.items() if not value]

    def post_url(self, slug: str) -> str:
        return f"{self.site_base_url.rstrip('/')}{self.post_path_prefix}{slug}"


settings = Settings()

__all__ = ["settings", "Settings"]
