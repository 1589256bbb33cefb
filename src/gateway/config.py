"""Gateway configuration."""

from src.shared.config import BaseNavigatorSettings


class GatewaySettings(BaseNavigatorSettings):
    """Settings specific to the FastAPI gateway."""

    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: list[str] = ["*"]
    upload_max_bytes: int = 5 * 1024 * 1024

    class Config(BaseNavigatorSettings.Config):
        env_prefix = "GATEWAY_"
