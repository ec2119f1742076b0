from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

# Get the project root directory (parent of classbook folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'classbook.db'}"
    echo_sql: bool = False
    
    log_level: str = "INFO"
    
    # Defaults used by the CLI when the teacher leaves a field empty
    default_sequence_color: str = "#2196F3"
    default_session_duration: int = 55  # minutes
    
    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_prefix="CLASSBOOK_",
        extra="ignore",
    )

settings = Settings()
