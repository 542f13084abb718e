from enums.uniswap_version import UniswapVersion
from models.sniper_config import SniperConfig

# clave de prueba conocida (cuenta #0 de hardhat/anvil), sin fondos reales
TEST_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_WALLET = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

TARGET = "0x1111111111111111111111111111111111111111"
OTHER_1 = "0x2222222222222222222222222222222222222222"
OTHER_2 = "0x3333333333333333333333333333333333333333"
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
FACTORY_V2 = "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"
FACTORY_V3 = "0x1F98431c8aD98523631AE4a59f267346ea31F984"
PAIR = "0x4444444444444444444444444444444444444444"


def make_config(**overrides) -> SniperConfig:
    values = dict(
        token_address=TARGET,
        factory_v2_address=FACTORY_V2,
        factory_v3_address=FACTORY_V3,
        rpc_endpoint="http://localhost:8545",
        private_key=TEST_KEY,
        purchase_amount="0.1",
        gas_price="42",
        slippage=0.01,
        testnet=False,
    )
    values.update(overrides)
    return SniperConfig(**values)


def pair_log(token0: str, token1: str, version: UniswapVersion = UniswapVersion.V2, block: int = 1) -> dict:
    if version is UniswapVersion.V2:
        args = {"token0": token0, "token1": token1, "pair": PAIR, "": 1}
    else:
        args = {"token0": token0, "token1": token1, "fee": 3000, "tickSpacing": 60, "pool": PAIR}
    return {"args": args, "blockNumber": block, "transactionHash": None}
