"""
Configuration loading for the Uniswap pair sniper.

Values come from three layers, later ones winning:

1. ``config.yaml`` in the project root (optional, lower-case keys),
2. a ``.env`` file, loaded into the environment by python-dotenv,
3. the process environment (upper-case keys, e.g. ``TOKEN_ADDRESS``).

The merged mapping is validated by :class:`models.sniper_config.SniperConfig`.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

import yaml  # type: ignore
from dotenv import find_dotenv, load_dotenv

from models.sniper_config import SniperConfig

# campo del modelo -> variable de entorno
ENV_KEYS: Dict[str, str] = {
    "token_address": "TOKEN_ADDRESS",
    "factory_v2_address": "FACTORY_V2_ADDRESS",
    "factory_v3_address": "FACTORY_V3_ADDRESS",
    "rpc_endpoint": "RPC_ENDPOINT",
    "private_key": "PRIVATE_KEY",
    "purchase_amount": "PURCHASE_AMOUNT",
    "gas_price": "GAS_PRICE",
    "slippage": "SLIPPAGE",
    "testnet": "TESTNET",
    "deadline_minutes": "DEADLINE_MINUTES",
    "poll_interval_secs": "POLL_INTERVAL_SECS",
    "rpc_timeout_secs": "RPC_TIMEOUT_SECS",
    "disable_multihops": "DISABLE_MULTIHOPS",
    "dry_run": "DRY_RUN",
    "telegram_token": "TELEGRAM_TOKEN",
    "telegram_chat_id": "TELEGRAM_CHAT_ID",
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load application configuration from ``config.yaml``.

    :param config_path: explicit path; defaults to ``CONFIG_PATH`` or the
        ``config.yaml`` next to ``main.py``.
    :returns: A dictionary representing the configuration. Missing files
        quietly yield an empty dictionary.
    """
    if config_path is None:
        base_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
        config_path = os.getenv("CONFIG_PATH") or os.path.join(base_dir, "config.yaml")
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    return {}


def _from_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for field, env_key in ENV_KEYS.items():
        raw = environ.get(env_key)
        if raw is not None and raw.strip() != "":
            values[field] = raw
    return values


def build_sniper_config(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    load_env_file: bool = True,
) -> SniperConfig:
    """Merge ``config.yaml`` and the environment into a validated config.

    :raises pydantic.ValidationError: on missing or malformed values.
    """
    if load_env_file:
        load_dotenv(find_dotenv(usecwd=True), override=False)
    file_values = {k: v for k, v in load_config(config_path).items() if k in ENV_KEYS}
    merged = {**file_values, **_from_env(os.environ if environ is None else environ)}
    return SniperConfig(**merged)
