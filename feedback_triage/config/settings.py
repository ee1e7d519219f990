# feedback_triage/config/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import List

# Get project root (2 levels up from this file)
PROJECT_ROOT = Path(__file__).parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        case_sensitive=False,
        extra="ignore",
    )

    # SQL Server
    sql_server_host: str
    sql_server_port: int = 1433
    sql_server_database: str
    sql_server_username: str
    sql_server_password: str
    feedback_table: str = "customer_insights.feedback_triage"

    # Repeat-issue detection
    repeat_window_days: int = 30
    similarity_threshold: float = 0.4

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 5001
    cors_origins: str = "http://localhost:5173"

    # Logging
    log_level: str = "INFO"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse the comma separated CORS origins."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
