"""Configuration for the MWS client."""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class MWSConfig:
    """Configuration for the MWS client."""

    # Seller credentials
    seller_id: str = ""
    access_key_id: str = ""
    secret_key: str = ""
    aws_profile: str = ""

    # Endpoint configuration
    host: str = "mws.amazonservices.de"
    timeout_seconds: float = 30.0
    user_agent: str = "mws-client/0.1.0 (Language=Python)"

    # OpenTelemetry configuration
    otel_endpoint: str = ""
    otel_console_export: bool = False

    # CloudWatch EMF metrics on stdout
    metrics_enabled: bool = False

    @classmethod
    def from_env(cls) -> "MWSConfig":
        """Load configuration from environment variables."""
        return cls(
            seller_id=os.getenv("AMAZON_MERCHANT_ID", ""),
            access_key_id=os.getenv("AMAZON_ACCESS_KEY_ID", ""),
            secret_key=os.getenv("AMAZON_SECRET_ACCESS_KEY", ""),
            aws_profile=os.getenv("AWS_PROFILE", ""),
            host=os.getenv("MWS_HOST", cls.host),
            timeout_seconds=float(os.getenv("MWS_TIMEOUT_SECONDS", cls.timeout_seconds)),
            user_agent=os.getenv("MWS_USER_AGENT", cls.user_agent),
            otel_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", ""),
            otel_console_export=os.getenv("OTEL_CONSOLE_EXPORT", "").lower() == "true",
            metrics_enabled=os.getenv("MWS_METRICS_ENABLED", "").lower() == "true",
        )
