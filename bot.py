from web3 import Web3
from eth_account import Account
from aiohttp import ClientSession, ClientTimeout
from datetime import datetime
from colorama import *
from config import Config, ConfigError
import asyncio, random, json, pytz

utc = pytz.utc

class LiskWeth:
    WETH_CONTRACT_ABI = json.loads('''[
        {"type":"function","name":"balanceOf","stateMutability":"view","inputs":[{"name":"owner","type":"address"}],"outputs":[{"name":"","type":"uint256"}]},
        {"type":"function","name":"withdraw","stateMutability":"nonpayable","inputs":[{"name":"wad","type":"uint256"}],"outputs":[]},
        {"type":"function","name":"deposit","stateMutability":"payable","inputs":[],"outputs":[]}
    ]''')

    def __init__(self, config: Config, web3=None, sleep=None, rng=None) -> None:
        self.config = config
        self.web3 = web3 or Web3(Web3.HTTPProvider(
            config.rpc_url, request_kwargs={"timeout": config.request_timeout}
        ))
        self.sleep = sleep or asyncio.sleep
        self.rng = rng or random.Random()
        self.weth_contract = self.web3.eth.contract(
            address=Web3.to_checksum_address(config.weth_contract_address),
            abi=self.WETH_CONTRACT_ABI
        )

    def log(self, message):
        print(
            f"{Fore.CYAN + Style.BRIGHT}[ {datetime.now().astimezone(utc).strftime('%x %X %Z')} ]{Style.RESET_ALL}"
            f"{Fore.WHITE + Style.BRIGHT} | {Style.RESET_ALL}{message}",
            flush=True
        )

    def welcome(self):
        print(
            f"""
        {Fore.GREEN + Style.BRIGHT}Lisk WETH{Fore.BLUE + Style.BRIGHT} Auto BOT
            """
        )

    def generate_address(self, account: str):
        try:
            account = Account.from_key(account)
            address = account.address

            return address
        except Exception as e:
            self.log(
                f"{Fore.CYAN+Style.BRIGHT}Status    :{Style.RESET_ALL}"
                f"{Fore.RED+Style.BRIGHT} Generate Address Failed {Style.RESET_ALL}"
                f"{Fore.MAGENTA+Style.BRIGHT}-{Style.RESET_ALL}"
                f"{Fore.YELLOW+Style.BRIGHT} {str(e)} {Style.RESET_ALL}"
            )
            return None

    def mask_account(self, account):
        try:
            mask_account = account[:6] + '*' * 6 + account[-6:]
            return mask_account
        except Exception as e:
            return None

    def random_amount(self) -> int:
        return self.rng.randint(self.config.min_amount_wei, self.config.max_amount_wei)

    async def delay(self, seconds, reason: str):
        if seconds <= 0:
            return
        self.log(
            f"{Fore.BLUE + Style.BRIGHT}Wait For{Style.RESET_ALL}"
            f"{Fore.WHITE + Style.BRIGHT} {seconds} {Style.RESET_ALL}"
            f"{Fore.BLUE + Style.BRIGHT}Seconds {reason}...{Style.RESET_ALL}"
        )
        await self.sleep(seconds)

    def get_gas_fees(self):
        block = self.web3.eth.get_block("latest")
        base_fee = block.get("baseFeePerGas") or 0
        max_priority_fee = self.config.priority_fee_wei
        max_fee = int(base_fee) + max_priority_fee * 2

        return max_fee, max_priority_fee

    async def get_weth_balance(self, address: str):
        try:
            balance = self.weth_contract.functions.balanceOf(address).call()
            return int(balance)
        except Exception as e:
            self.log(
                f"{Fore.CYAN+Style.BRIGHT}   Message  :{Style.RESET_ALL}"
                f"{Fore.RED+Style.BRIGHT} Fetch WETH Balance Failed: {str(e)} {Style.RESET_ALL}"
            )
            return None

    def count_today_transactions(self, items, today=None):
        today = today or datetime.now(utc).date()
        count = 0
        for tx in items:
            timestamp = tx.get("timestamp") if isinstance(tx, dict) else None
            if not timestamp:
                continue

            tx_time = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
            if tx_time.tzinfo is None:
                tx_time = utc.localize(tx_time)

            if tx_time.astimezone(utc).date() == today:
                count += 1

        return count

    async def get_today_transactions(self, address: str):
        url = f"{self.config.explorer_url}/api/v2/addresses/{address}/transactions?filter=from"
        try:
            async with ClientSession(timeout=ClientTimeout(total=self.config.request_timeout)) as session:
                async with session.get(url=url) as response:
                    if not 200 <= response.status < 300:
                        self.log(
                            f"{Fore.CYAN+Style.BRIGHT}   Message  :{Style.RESET_ALL}"
                            f"{Fore.RED+Style.BRIGHT} Fetch Transactions Failed {Style.RESET_ALL}"
                            f"{Fore.MAGENTA+Style.BRIGHT}-{Style.RESET_ALL}"
                            f"{Fore.YELLOW+Style.BRIGHT} Status {response.status} {response.reason} {Style.RESET_ALL}"
                        )
                        return 0

                    data = await response.json(content_type=None)

            items = data.get("items") if isinstance(data, dict) else None
            if not isinstance(items, list):
                self.log(
                    f"{Fore.CYAN+Style.BRIGHT}   Message  :{Style.RESET_ALL}"
                    f"{Fore.YELLOW+Style.BRIGHT} Invalid Response or No Transactions Found {Style.RESET_ALL}"
                )
                return 0

            count = self.count_today_transactions(items)
        except Exception as e:
            self.log(
                f"{Fore.CYAN+Style.BRIGHT}   Message  :{Style.RESET_ALL}"
                f"{Fore.RED+Style.BRIGHT} Fetch Transactions Failed: {str(e)} {Style.RESET_ALL}"
            )
            return 0

        self.log(
            f"{Fore.CYAN+Style.BRIGHT}Today Txs :{Style.RESET_ALL}"
            f"{Fore.WHITE+Style.BRIGHT} {count} {Style.RESET_ALL}"
        )
        return count

    def send_raw_transaction(self, account: str, tx: dict):
        signed_tx = self.web3.eth.account.sign_transaction(tx, account)
        raw_tx = self.web3.eth.send_raw_transaction(signed_tx.raw_transaction)
        tx_hash = Web3.to_hex(raw_tx)
        return tx_hash

    def build_tx_params(self, address: str, value: int = 0):
        max_fee, max_priority_fee = self.get_gas_fees()
        params = {
            "from": address,
            "gas": self.config.gas_limit,
            "maxFeePerGas": int(max_fee),
            "maxPriorityFeePerGas": int(max_priority_fee),
            "nonce": self.web3.eth.get_transaction_count(address, "pending"),
            "chainId": self.config.chain_id,
        }
        if value:
            params["value"] = value

        return params

    async def perform_deposit(self, account: str, address: str, amount_to_wei: int):
        try:
            deposit_data = self.weth_contract.functions.deposit()
            deposit_tx = deposit_data.build_transaction(self.build_tx_params(address, amount_to_wei))

            return self.send_raw_transaction(account, deposit_tx)
        except Exception as e:
            self.log(
                f"{Fore.CYAN+Style.BRIGHT}   Message  :{Style.RESET_ALL}"
                f"{Fore.RED+Style.BRIGHT} {str(e)} {Style.RESET_ALL}"
            )
            return None

    async def perform_withdraw(self, account: str, address: str, amount_to_wei: int):
        try:
            withdraw_data = self.weth_contract.functions.withdraw(amount_to_wei)
            withdraw_tx = withdraw_data.build_transaction(self.build_tx_params(address))

            return self.send_raw_transaction(account, withdraw_tx)
        except Exception as e:
            self.log(
                f"{Fore.CYAN+Style.BRIGHT}   Message  :{Style.RESET_ALL}"
                f"{Fore.RED+Style.BRIGHT} {str(e)} {Style.RESET_ALL}"
            )
            return None

    def log_tx_result(self, tx_hash):
        if tx_hash:
            self.log(
                f"{Fore.CYAN+Style.BRIGHT}   Status   :{Style.RESET_ALL}"
                f"{Fore.GREEN+Style.BRIGHT} Broadcasted {Style.RESET_ALL}"
            )
            self.log(
                f"{Fore.CYAN+Style.BRIGHT}   Tx Hash  :{Style.RESET_ALL}"
                f"{Fore.WHITE+Style.BRIGHT} {tx_hash} {Style.RESET_ALL}"
            )
            self.log(
                f"{Fore.CYAN+Style.BRIGHT}   Explorer :{Style.RESET_ALL}"
                f"{Fore.WHITE+Style.BRIGHT} {self.config.explorer_url}/tx/{tx_hash} {Style.RESET_ALL}"
            )
        else:
            self.log(
                f"{Fore.CYAN+Style.BRIGHT}   Status   :{Style.RESET_ALL}"
                f"{Fore.RED+Style.BRIGHT} Perform On-Chain Failed {Style.RESET_ALL}"
            )

    async def process_perform_deposit(self, account: str, address: str, amount_to_wei: int):
        self.log(
            f"{Fore.CYAN+Style.BRIGHT}Deposit   :{Style.RESET_ALL}"
            f"{Fore.WHITE+Style.BRIGHT} {Web3.from_wei(amount_to_wei, 'ether')} ETH {Style.RESET_ALL}"
        )
        tx_hash = await self.perform_deposit(account, address, amount_to_wei)
        self.log_tx_result(tx_hash)
        return tx_hash

    async def process_perform_withdraw(self, account: str, address: str, amount_to_wei: int):
        self.log(
            f"{Fore.CYAN+Style.BRIGHT}Withdraw  :{Style.RESET_ALL}"
            f"{Fore.WHITE+Style.BRIGHT} {Web3.from_wei(amount_to_wei, 'ether')} WETH {Style.RESET_ALL}"
        )
        tx_hash = await self.perform_withdraw(account, address, amount_to_wei)
        self.log_tx_result(tx_hash)
        return tx_hash

    async def process_check_balance(self, account: str, address: str):
        balance = await self.get_weth_balance(address)
        if balance is None:
            self.log(
                f"{Fore.CYAN+Style.BRIGHT}Status    :{Style.RESET_ALL}"
                f"{Fore.YELLOW+Style.BRIGHT} WETH Balance Unknown, Skipping Withdraw {Style.RESET_ALL}"
            )
            return

        self.log(
            f"{Fore.CYAN+Style.BRIGHT}Balance   :{Style.RESET_ALL}"
            f"{Fore.WHITE+Style.BRIGHT} {Web3.from_wei(balance, 'ether')} WETH {Style.RESET_ALL}"
        )

        if balance > 0:
            await self.process_perform_withdraw(account, address, balance)

    async def process_accounts(self, account: str, address: str):
        await self.process_check_balance(account, address)

        await self.delay(self.config.settle_delay, "Before Counting Txs")

        transactions_today = await self.get_today_transactions(address)
        loops_remaining = max(0, self.config.daily_tx_target - transactions_today)
        self.log(
            f"{Fore.CYAN+Style.BRIGHT}Loops     :{Style.RESET_ALL}"
            f"{Fore.WHITE+Style.BRIGHT} {loops_remaining} {Style.RESET_ALL}"
        )

        for i in range(loops_remaining):
            self.log(
                f"{Fore.GREEN+Style.BRIGHT} ● {Style.RESET_ALL}"
                f"{Fore.BLUE+Style.BRIGHT}Loop{Style.RESET_ALL}"
                f"{Fore.WHITE+Style.BRIGHT} {i+1} {Style.RESET_ALL}"
                f"{Fore.MAGENTA+Style.BRIGHT}Of{Style.RESET_ALL}"
                f"{Fore.WHITE+Style.BRIGHT} {loops_remaining} {Style.RESET_ALL}"
            )

            amount_to_wei = self.random_amount()

            await self.process_perform_deposit(account, address, amount_to_wei)
            await self.delay(self.config.deposit_delay, "Before Withdraw")

            await self.process_perform_withdraw(account, address, amount_to_wei)
            await self.delay(self.config.withdraw_delay, "For Next Loop")

        return loops_remaining

    async def main(self):
        accounts = self.config.private_keys

        self.welcome()
        self.log(
            f"{Fore.GREEN + Style.BRIGHT}Account's Total: {Style.RESET_ALL}"
            f"{Fore.WHITE + Style.BRIGHT}{len(accounts)}{Style.RESET_ALL}"
        )

        separator = "=" * 25
        for account in accounts:
            address = self.generate_address(account)

            self.log(
                f"{Fore.CYAN + Style.BRIGHT}{separator}[{Style.RESET_ALL}"
                f"{Fore.WHITE + Style.BRIGHT} {self.mask_account(address)} {Style.RESET_ALL}"
                f"{Fore.CYAN + Style.BRIGHT}]{separator}{Style.RESET_ALL}"
            )

            if not address:
                self.log(
                    f"{Fore.CYAN + Style.BRIGHT}Status    :{Style.RESET_ALL}"
                    f"{Fore.RED + Style.BRIGHT} Invalid Private Key or Library Version Not Supported {Style.RESET_ALL}"
                )
                continue

            try:
                await self.process_accounts(account, address)
            except Exception as e:
                self.log(
                    f"{Fore.CYAN + Style.BRIGHT}Status    :{Style.RESET_ALL}"
                    f"{Fore.RED + Style.BRIGHT} Wallet Failed {Style.RESET_ALL}"
                    f"{Fore.MAGENTA + Style.BRIGHT}-{Style.RESET_ALL}"
                    f"{Fore.YELLOW + Style.BRIGHT} {str(e)} {Style.RESET_ALL}"
                )
                continue

            self.log(
                f"{Fore.CYAN + Style.BRIGHT}Status    :{Style.RESET_ALL}"
                f"{Fore.GREEN + Style.BRIGHT} Wallet {self.mask_account(address)} Finished {Style.RESET_ALL}"
            )

        self.log(f"{Fore.CYAN + Style.BRIGHT}={Style.RESET_ALL}"*72)
        self.log(f"{Fore.BLUE + Style.BRIGHT}All Accounts Have Been Processed.{Style.RESET_ALL}")

def run():
    try:
        bot = LiskWeth(Config.from_env())
        asyncio.run(bot.main())
    except KeyboardInterrupt:
        print(
            f"{Fore.CYAN + Style.BRIGHT}[ {datetime.now().astimezone(utc).strftime('%x %X %Z')} ]{Style.RESET_ALL}"
            f"{Fore.WHITE + Style.BRIGHT} | {Style.RESET_ALL}"
            f"{Fore.RED + Style.BRIGHT}[ EXIT ] Lisk WETH - BOT{Style.RESET_ALL}"
        )
    except ConfigError as e:
        print(f"{Fore.RED + Style.BRIGHT}Config Error: {e}{Style.RESET_ALL}", flush=True)
    except Exception as e:
        print(f"{Fore.RED + Style.BRIGHT}Error: {e}{Style.RESET_ALL}", flush=True)

if __name__ == "__main__":
    run()
