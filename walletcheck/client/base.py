# walletcheck/client/base.py
from typing import Protocol, runtime_checkable

from walletcheck.client.models import Interaction, Transfer


@runtime_checkable
class LedgerDataSource(Protocol):
    """
    Read-only view of the ledger supplied by an indexing service.

    Implementations raise a WalletCheckError subclass on any failure and
    never hand back partial data.
    """

    async def fetch_balance(self, address: str) -> int:
        """Current native balance of address, in wei."""
        ...

    async def fetch_transfers(self, address: str) -> list[Transfer]:
        """Recent transfers touching address, in upstream order."""
        ...

    async def fetch_current_block(self) -> int:
        ...

    async def fetch_contract_interactions(self) -> list[Interaction]:
        """All recorded calls to the observed contract, for every sender."""
        ...
