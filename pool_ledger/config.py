"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings
from typing import Optional


class LedgerConfig(BaseSettings):
    """Pool ledger configuration"""
    
    # Integer model
    integer_bits: int = Field(default=32, ge=1)  # Balances are unsigned integers of this width
    
    # Fee schedule (basis points)
    max_bps: int = Field(default=10_000, gt=0)
    entry_fee_bps: int = Field(default=200, ge=0)  # 2%
    exit_fee_bps: int = Field(default=400, ge=0)   # 4%
    
    # Borrowing rules
    borrow_percentage: int = Field(default=10, ge=0)  # Max share of lender deposit, in percent
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr
    
    # Feature flags
    enable_audit_logging: bool = True
    
    @model_validator(mode="after")
    def check_fee_rates(self) -> "LedgerConfig":
        """Fees cannot exceed the whole amount"""
        for name in ("entry_fee_bps", "exit_fee_bps"):
            if getattr(self, name) > self.max_bps:
                raise ValueError(f"{name} must not exceed max_bps ({self.max_bps})")
        return self
    
    class Config:
        env_prefix = "POOL_LEDGER_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
