import json
import logging
from typing import Any, Dict, List, Optional, Union

from eth_abi.exceptions import DecodingError
from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from eth_utils import is_0x_prefixed, is_hexstr
from hexbytes import HexBytes
from web3 import Web3
from web3.contract import Contract
from web3.exceptions import (
    ContractLogicError,
    TransactionNotFound,
    Web3Exception,
    Web3RPCError,
)
from web3.middleware import SignAndSendRawMiddlewareBuilder

from exceptions import (
    BadRequestException,
    ContractCallError,
    TransactionFailed,
    UnauthorizedException,
)

# Name of the local signing layer in a provider's middleware onion
SIGNER_MIDDLEWARE = "local_signer"

# Tip for EIP-1559 transactions without explicit fees
DEFAULT_PRIORITY_FEE = Web3.to_wei(1.5, "gwei")

ABI = Union[str, List[Dict[str, Any]]]


def parse_value(value: Union[str, int, None]) -> int:
    """Wei amount from int, decimal string or 0x-hex string"""
    if value is None or value == "":
        return 0
    if isinstance(value, int):
        return value
    value = value.strip()
    if is_0x_prefixed(value):
        return int(value, 16)
    return int(value)


class Wallet:
    """Local account bound to a JSON-RPC provider"""

    def __init__(self, private_key: str, w3: Web3):
        self.account: LocalAccount = Account.from_key(private_key)
        self.w3 = w3

        # Contract transactions sent through w3 get signed locally
        self.w3.eth.default_account = self.account.address
        signer = SignAndSendRawMiddlewareBuilder.build(self.account)
        if SIGNER_MIDDLEWARE in self.w3.middleware_onion:
            self.w3.middleware_onion.replace(SIGNER_MIDDLEWARE, signer)
        else:
            self.w3.middleware_onion.inject(signer, name=SIGNER_MIDDLEWARE, layer=0)

    @property
    def address(self) -> str:
        return self.account.address

    @property
    def provider(self) -> Web3:
        return self.w3

    def estimate_gas(self, tx: dict) -> int:
        return self.w3.eth.estimate_gas({"from": self.address, **tx})

    def populate_transaction(self, tx: dict) -> dict:
        tx = {"from": self.address, **tx}
        tx.setdefault("chainId", self.w3.eth.chain_id)

        if "gasPrice" in tx or "maxFeePerGas" in tx:
            return tx

        base_fee = self.w3.eth.get_block("latest").get("baseFeePerGas")
        if base_fee is None:
            tx["gasPrice"] = self.w3.eth.gas_price
        else:
            tx.setdefault("maxPriorityFeePerGas", DEFAULT_PRIORITY_FEE)
            tx["maxFeePerGas"] = base_fee * 2 + tx["maxPriorityFeePerGas"]
        return tx

    def send_transaction(self, tx: dict) -> HexBytes:
        signed = self.account.sign_transaction(self.populate_transaction(tx))
        return self.w3.eth.send_raw_transaction(signed.raw_transaction)

    def sign_typed_data(self, domain: dict, types: dict, value: dict) -> str:
        signed = self.account.sign_typed_data(
            domain_data=domain, message_types=types, message_data=value
        )
        return Web3.to_hex(signed.signature)


class Web3Service:
    """Thin helpers around web3.py and eth-account"""

    def send_transaction(
        self, rpc: str, from_private_key: str, to: str, data: str, value: str
    ):
        # init provider and signer
        wallet = self.get_signer(from_private_key, rpc)

        # tx data
        tx_data = {"to": Web3.to_checksum_address(to), "value": parse_value(value)}
        if data:
            tx_data["data"] = data

        nonce = wallet.provider.eth.get_transaction_count(wallet.address)
        gas = wallet.estimate_gas(tx_data)

        # sign and send tx - wait for receipt
        tx_hash = wallet.send_transaction({**tx_data, "nonce": nonce, "gas": gas})
        logging.info(f"Sent transaction {Web3.to_hex(tx_hash)} from {wallet.address}")

        receipt = wallet.provider.eth.wait_for_transaction_receipt(tx_hash)
        if receipt["status"] == 0:
            raise TransactionFailed(receipt)
        return receipt

    def validate_signature(self, account: str, signature: str, msg: str) -> bool:
        try:
            if is_0x_prefixed(msg) and is_hexstr(msg):
                message = encode_defunct(hexstr=msg)
            else:
                message = encode_defunct(text=msg)
            recovered_addr = Account.recover_message(message, signature=signature)
        except Exception as err:
            logging.warning(f"Signature recovery failed for {account}: {err}")
            raise UnauthorizedException("Problem with signature verification.") from err

        if recovered_addr.lower() != account.lower():
            logging.warning(f"Signature of {recovered_addr} does not match {account}")
            raise BadRequestException("Signature is not correct.")

        return True

    def get_provider(self, rpc: str) -> Web3:
        return Web3(Web3.HTTPProvider(rpc))

    def get_signer(self, from_private_key: str, rpc: str) -> Wallet:
        return Wallet(from_private_key, self.get_provider(rpc))

    def get_contract(
        self,
        address: str,
        contract_interface: ABI,
        signer_or_provider: Union[Wallet, Web3],
    ) -> Contract:
        if isinstance(signer_or_provider, Wallet):
            w3 = signer_or_provider.w3
        else:
            w3 = signer_or_provider
        return w3.eth.contract(
            address=Web3.to_checksum_address(address), abi=_load_abi(contract_interface)
        )

    def call_contract(
        self,
        contract: Contract,
        method: str,
        args: list,
        overrides: Optional[dict] = None,
    ):
        """
        Read-only functions return the call result,
        state-changing ones are sent and their receipt is returned
        """
        overrides = dict(overrides or {})
        fn = getattr(contract.functions, method)(*args)

        try:
            if _is_read_only(fn.abi):
                return fn.call(overrides)

            tx_hash = fn.transact(overrides)
            receipt = contract.w3.eth.wait_for_transaction_receipt(tx_hash)
        except ContractLogicError as err:
            raise ContractCallError(getattr(err, "message", None) or str(err)) from err
        except Web3RPCError as err:
            error = (err.rpc_response or {}).get("error")
            if not isinstance(error, dict) or not error.get("message"):
                raise
            raise ContractCallError(error["message"]) from err

        if receipt["status"] == 0:
            raise TransactionFailed(receipt)
        return receipt

    def get_contract_interface(self, fragments: ABI) -> type:
        return Web3().eth.contract(abi=_load_abi(fragments))

    def domain_eip712(
        self, name: str, version: str, verifying_contract: str, chain_id: int
    ) -> dict:
        return {
            "name": name,
            "version": version,
            "verifyingContract": verifying_contract,
            "chainId": chain_id,
        }

    def sign_typed_data_v4(
        self, wallet: Wallet, domain: dict, types: dict, value: dict
    ) -> str:
        return wallet.sign_typed_data(domain, types, value)

    def get_transaction(self, provider: Web3, tx_hash: str):
        try:
            return provider.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            return None

    def decode_transaction_logs(self, abi: ABI, transaction_logs: list) -> list:
        iface = self.get_contract_interface(abi)
        events = [
            getattr(iface.events, item["name"])
            for item in iface.abi
            if item.get("type") == "event"
        ]
        return [_parse_log(events, log) for log in transaction_logs]


def _load_abi(abi: ABI) -> list:
    if isinstance(abi, str):
        return json.loads(abi)
    return list(abi)


def _is_read_only(fn_abi: dict) -> bool:
    if fn_abi.get("stateMutability") in ("view", "pure"):
        return True
    return bool(fn_abi.get("constant"))


def _parse_log(events: list, log: dict):
    for event in events:
        try:
            return event().process_log(log)
        except (Web3Exception, DecodingError):
            continue
    return None
