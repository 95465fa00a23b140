from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
import logging
from typing import Dict, List, Tuple
from urllib.parse import urlsplit

from ..pricing.event_decoder import SWAP_TOPIC

logger = logging.getLogger(__name__)


class Web3Client:
    """Async read-only access to the pool, router and token contracts."""

    # Uniswap V2 Pair ABI (reserves and token slots)
    PAIR_ABI = [
        {
            "constant": True,
            "inputs": [],
            "name": "getReserves",
            "outputs": [
                {"name": "reserve0", "type": "uint112"},
                {"name": "reserve1", "type": "uint112"},
                {"name": "blockTimestampLast", "type": "uint32"}
            ],
            "type": "function"
        },
        {"constant": True, "inputs": [], "name": "token0", "outputs": [{"name": "", "type": "address"}], "type": "function"},
        {"constant": True, "inputs": [], "name": "token1", "outputs": [{"name": "", "type": "address"}], "type": "function"},
    ]

    # Uniswap V2 Router ABI (quotes only)
    ROUTER_ABI = [
        {
            "inputs": [
                {"name": "amountIn", "type": "uint256"},
                {"name": "path", "type": "address[]"}
            ],
            "name": "getAmountsOut",
            "outputs": [{"name": "amounts", "type": "uint256[]"}],
            "stateMutability": "view",
            "type": "function"
        }
    ]

    # ERC20 ABI for decimals and supply
    ERC20_ABI = [
        {
            "constant": True,
            "inputs": [],
            "name": "decimals",
            "outputs": [{"name": "", "type": "uint8"}],
            "type": "function"
        },
        {
            "constant": True,
            "inputs": [],
            "name": "totalSupply",
            "outputs": [{"name": "", "type": "uint256"}],
            "type": "function"
        }
    ]

    def __init__(self, rpc_url: str):
        """
        Initialize the client against a JSON-RPC endpoint.

        Args:
            rpc_url: HTTP(S) URL of the chain node
        """
        if not rpc_url:
            raise ValueError("rpc_url must be set")

        self.w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
        # Host only: the path and query may carry an API key
        parts = urlsplit(rpc_url)
        logger.info(f"Web3 client configured for {parts.scheme}://{parts.hostname}")

    def _contract(self, address: str, abi: List[Dict]):
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    async def get_block_number(self) -> int:
        """Get current block number"""
        return await self.w3.eth.block_number

    async def get_swap_logs(self, pool_address: str, from_block: int, to_block: int) -> List[Dict]:
        """
        Get Swap logs emitted by the pool in an inclusive block range.

        Args:
            pool_address: Pair contract address
            from_block: First block to include
            to_block: Last block to include

        Returns:
            Raw log entries in node order
        """
        logs = await self.w3.eth.get_logs({
            'fromBlock': from_block,
            'toBlock': to_block,
            'address': Web3.to_checksum_address(pool_address),
            'topics': [SWAP_TOPIC]
        })
        return list(logs)

    async def get_reserves(self, pool_address: str) -> Tuple[int, int]:
        """Get (reserve0, reserve1) of a V2 pair"""
        contract = self._contract(pool_address, self.PAIR_ABI)
        reserve0, reserve1, _ = await contract.functions.getReserves().call()
        return reserve0, reserve1

    async def get_pair_tokens(self, pool_address: str) -> Tuple[str, str]:
        """Get (token0, token1) addresses of a V2 pair"""
        contract = self._contract(pool_address, self.PAIR_ABI)
        token0 = await contract.functions.token0().call()
        token1 = await contract.functions.token1().call()
        return token0, token1

    async def get_amounts_out(self, router_address: str, amount_in: int, path: List[str]) -> List[int]:
        """
        Quote a swap along an explicit token path.

        Args:
            router_address: V2 router address
            amount_in: Raw input amount of path[0]
            path: Ordered token addresses

        Returns:
            Amounts for every hop, amounts[-1] being the final output
        """
        contract = self._contract(router_address, self.ROUTER_ABI)
        checksum_path = [Web3.to_checksum_address(address) for address in path]
        return await contract.functions.getAmountsOut(amount_in, checksum_path).call()

    async def get_token_decimals(self, token_address: str) -> int:
        contract = self._contract(token_address, self.ERC20_ABI)
        return await contract.functions.decimals().call()

    async def get_total_supply(self, token_address: str) -> int:
        contract = self._contract(token_address, self.ERC20_ABI)
        return await contract.functions.totalSupply().call()
