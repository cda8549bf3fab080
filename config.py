from decimal import Decimal, InvalidOperation
from dotenv import load_dotenv
from web3 import Web3
import os

class ConfigError(ValueError):
    pass

class Config:
    RPC_URL = "https://rpc.api.lisk.com"
    CHAIN_ID = 1135
    EXPLORER_URL = "https://blockscout.lisk.com"
    WETH_CONTRACT_ADDRESS = "0x4200000000000000000000000000000000000006"

    def __init__(
        self,
        private_keys: list,
        rpc_url: str = RPC_URL,
        chain_id: int = CHAIN_ID,
        explorer_url: str = EXPLORER_URL,
        weth_contract_address: str = WETH_CONTRACT_ADDRESS,
        daily_tx_target: int = 40,
        settle_delay: float = 10,
        deposit_delay: float = 3,
        withdraw_delay: float = 5,
        min_amount: str = "0.000001",
        max_amount: str = "0.000002",
        gas_limit: int = 100000,
        priority_fee_gwei: str = "1",
        request_timeout: float = 10,
    ) -> None:
        self.private_keys = [key.strip() for key in private_keys if key and key.strip()]
        self.rpc_url = rpc_url
        self.chain_id = chain_id
        self.explorer_url = explorer_url.rstrip("/")
        self.weth_contract_address = weth_contract_address
        self.daily_tx_target = daily_tx_target
        self.settle_delay = settle_delay
        self.deposit_delay = deposit_delay
        self.withdraw_delay = withdraw_delay
        self.min_amount = Decimal(str(min_amount))
        self.max_amount = Decimal(str(max_amount))
        self.gas_limit = gas_limit
        self.priority_fee_gwei = Decimal(str(priority_fee_gwei))
        self.request_timeout = request_timeout
        self.validate()

    def validate(self):
        if not self.private_keys:
            raise ConfigError("No Private Keys Configured, Set PRIVATE_KEYS.")

        if self.daily_tx_target < 0:
            raise ConfigError("DAILY_TX_TARGET must be >= 0.")

        for name in ("settle_delay", "deposit_delay", "withdraw_delay"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name.upper()} must be >= 0.")

        if self.min_amount <= 0 or self.min_amount_wei == 0:
            raise ConfigError("MIN_AMOUNT must be at least 1 wei.")

        if self.min_amount > self.max_amount:
            raise ConfigError("MAX_AMOUNT must be >= MIN_AMOUNT.")

        if self.priority_fee_gwei < 0:
            raise ConfigError("PRIORITY_FEE_GWEI must be >= 0.")

        if self.gas_limit <= 0:
            raise ConfigError("GAS_LIMIT must be > 0.")

        if self.request_timeout <= 0:
            raise ConfigError("REQUEST_TIMEOUT must be > 0.")

    @property
    def min_amount_wei(self) -> int:
        return Web3.to_wei(self.min_amount, "ether")

    @property
    def max_amount_wei(self) -> int:
        return Web3.to_wei(self.max_amount, "ether")

    @property
    def priority_fee_wei(self) -> int:
        return Web3.to_wei(self.priority_fee_gwei, "gwei")

    @classmethod
    def from_env(cls, env=None):
        if env is None:
            load_dotenv()
            env = os.environ

        raw_keys = env.get("PRIVATE_KEYS", "")
        if not raw_keys.strip():
            raise ConfigError("Environment variable PRIVATE_KEYS not set")

        def read(name, cast, default):
            value = env.get(name)
            if value is None or not value.strip():
                return default
            try:
                return cast(value.strip())
            except (ValueError, InvalidOperation):
                raise ConfigError(f"Invalid value for {name}: {value!r}")

        return cls(
            private_keys=raw_keys.split(","),
            rpc_url=read("RPC_URL", str, cls.RPC_URL),
            chain_id=read("CHAIN_ID", int, cls.CHAIN_ID),
            explorer_url=read("EXPLORER_URL", str, cls.EXPLORER_URL),
            weth_contract_address=read("WETH_CONTRACT_ADDRESS", str, cls.WETH_CONTRACT_ADDRESS),
            daily_tx_target=read("DAILY_TX_TARGET", int, 40),
            settle_delay=read("SETTLE_DELAY", float, 10),
            deposit_delay=read("DEPOSIT_DELAY", float, 3),
            withdraw_delay=read("WITHDRAW_DELAY", float, 5),
            min_amount=read("MIN_AMOUNT", Decimal, "0.000001"),
            max_amount=read("MAX_AMOUNT", Decimal, "0.000002"),
            gas_limit=read("GAS_LIMIT", int, 100000),
            priority_fee_gwei=read("PRIORITY_FEE_GWEI", Decimal, "1"),
            request_timeout=read("REQUEST_TIMEOUT", float, 10),
        )
