# walletcheck/config.py
from pathlib import Path

import yaml
from pydantic import BaseModel


class DuneConfig(BaseModel):
    api_key: str
    base_url: str = "https://api.dune.com"
    chain_id: int = 11155111  # Sepolia
    transfer_limit: int = 100
    query_row_limit: int = 1000
    interaction_query_id: int = 4072279
    current_block_query_id: int = 4074150
    timeout_seconds: float = 10.0


class WindowsConfig(BaseModel):
    balance_blocks: int = 3
    interaction_blocks: int = 100


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class LoggingConfig(BaseModel):
    level: str = "INFO"


class Config(BaseModel):
    dune: DuneConfig
    windows: WindowsConfig = WindowsConfig()
    server: ServerConfig = ServerConfig()
    logging: LoggingConfig = LoggingConfig()


def load_config(path: Path) -> Config:
    with open(path) as f:
        data = yaml.safe_load(f)
    return Config(**data)
