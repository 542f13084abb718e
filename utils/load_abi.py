import json
import os
from functools import lru_cache
from pathlib import Path

_ABI_DIR = Path(os.getenv("ABI_DIR", Path(__file__).resolve().parent / "abis"))


@lru_cache(maxsize=None)
def _load_abi(name: str) -> list:
    path = _ABI_DIR / name
    if not path.is_file():
        raise FileNotFoundError(f"ABI no encontrado: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)

def load_v2_factory_abi() -> list:
    return _load_abi("uniswap_v2_factory_abi.json")

def load_v3_factory_abi() -> list:
    return _load_abi("uniswap_v3_factory_abi.json")

def load_v2_router_abi() -> list:
    return _load_abi("uniswap_v2_router_abi.json")

def load_v3_swap_router_abi() -> list:
    return _load_abi("uniswap_v3_swap_router_abi.json")

def load_v3_quoter_abi() -> list:
    return _load_abi("uniswap_v3_quoter_abi.json")
