# temu_seller/config/settings.py
from dataclasses import dataclass
from typing import Dict, Optional
from dotenv import load_dotenv
import os

load_dotenv()

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

class Settings:
    """Application configuration settings."""
    # Kuajingmaihuo seller portal (login, codes, mall list)
    TEMU_BASE_URL: str = os.getenv("TEMU_BASE_URL", "https://seller.kuajingmaihuo.com")
    # Seller Central console (code login, user info, orders)
    TEMU_SELLER_CENTRAL_BASE_URL: str = os.getenv("TEMU_SELLER_CENTRAL_BASE_URL", "https://agentseller.temu.com")

    TEMU_TIMEOUT: float = float(os.getenv("TEMU_TIMEOUT", 30))
    TEMU_VERIFY_SSL: bool = os.getenv("TEMU_VERIFY_SSL", "true").lower() == "true"
    TEMU_PROXY: str = os.getenv("TEMU_PROXY", "")
    TEMU_USER_AGENT: str = os.getenv("TEMU_USER_AGENT", DEFAULT_USER_AGENT)
    TEMU_DEBUG: bool = os.getenv("TEMU_DEBUG", "false").lower() == "true"

    TEMU_RETRY_COUNT: int = int(os.getenv("TEMU_RETRY_COUNT", 3))
    TEMU_RETRY_WAIT_TIME: float = float(os.getenv("TEMU_RETRY_WAIT_TIME", 0.5))
    TEMU_RETRY_MAX_WAIT_TIME: float = float(os.getenv("TEMU_RETRY_MAX_WAIT_TIME", 1.0))

    def validate(self) -> None:
        """Validate that all required environment variables are set."""
        required = {
            "TEMU_BASE_URL": self.TEMU_BASE_URL,
            "TEMU_SELLER_CENTRAL_BASE_URL": self.TEMU_SELLER_CENTRAL_BASE_URL,
            "TEMU_USER_AGENT": self.TEMU_USER_AGENT,
        }
        for name, value in required.items():
            if not value:
                raise ValueError(f"Environment variable {name} is not set!")
        if self.TEMU_TIMEOUT <= 0:
            raise ValueError("TEMU_TIMEOUT must be positive!")
        if self.TEMU_RETRY_COUNT < 0:
            raise ValueError("TEMU_RETRY_COUNT must be non-negative!")
        if self.TEMU_RETRY_WAIT_TIME < 0 or self.TEMU_RETRY_MAX_WAIT_TIME < 0:
            raise ValueError("Retry wait times must be non-negative!")


@dataclass(frozen=True)
class ClientConfig:
    """Transport settings shared by every request. Immutable once built."""
    base_url: str = "https://seller.kuajingmaihuo.com"
    seller_central_base_url: str = "https://agentseller.temu.com"
    timeout: float = 30.0
    debug: bool = False
    verify_ssl: bool = True
    proxy: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT
    retry_count: int = 3
    retry_wait_time: float = 0.5
    retry_max_wait_time: float = 1.0

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ClientConfig":
        settings.validate()
        return cls(
            base_url=settings.TEMU_BASE_URL,
            seller_central_base_url=settings.TEMU_SELLER_CENTRAL_BASE_URL,
            timeout=settings.TEMU_TIMEOUT,
            debug=settings.TEMU_DEBUG,
            verify_ssl=settings.TEMU_VERIFY_SSL,
            proxy=settings.TEMU_PROXY or None,
            user_agent=settings.TEMU_USER_AGENT,
            retry_count=settings.TEMU_RETRY_COUNT,
            retry_wait_time=settings.TEMU_RETRY_WAIT_TIME,
            retry_max_wait_time=settings.TEMU_RETRY_MAX_WAIT_TIME,
        )

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

settings = Settings()
