import os
from dotenv import load_dotenv
from pydantic import BaseModel

# Load variables from .env
load_dotenv()


class Settings(BaseModel):
    app_name: str = "Stay Enquiry Desk"
    database_url: str = "sqlite+aiosqlite:///./enquiry_desk.db"

    # Remote backend used by the selector client
    backend_base_url: str = "http://localhost:8000"
    backend_timeout_seconds: float = 10.0

    # Demo data on startup (empty database only)
    seed_demo_data: bool = True

    # Rate limiting settings
    rate_limit_enabled: bool = True  # Killswitch for quick disable
    rate_limit_enquiries: str = "30/minute"  # Enquiry creation per IP

    # Logging settings
    log_format: str = "console"  # Options: "console", "json"
    log_slow_request_threshold_ms: int = 500  # Log timing only if duration > threshold


settings = Settings(
    database_url=os.environ.get(
        "DATABASE_URL", "sqlite+aiosqlite:///./enquiry_desk.db"
    ),
    backend_base_url=os.environ.get("BACKEND_BASE_URL", "http://localhost:8000"),
    backend_timeout_seconds=float(os.environ.get("BACKEND_TIMEOUT_SECONDS", "10")),
    seed_demo_data=os.environ.get("SEED_DEMO_DATA", "true").lower() == "true",
    rate_limit_enabled=os.environ.get("RATE_LIMIT_ENABLED", "true").lower() == "true",
    rate_limit_enquiries=os.environ.get("RATE_LIMIT_ENQUIRIES", "30/minute"),
    log_format=os.environ.get("LOG_FORMAT", "console"),
    log_slow_request_threshold_ms=int(
        os.environ.get("LOG_SLOW_REQUEST_THRESHOLD_MS", "500")
    ),
)
