"""
digital_bhutan.services.minting — Credential NFT Minting
=========================================================

The platform never talks to a chain directly.  A :class:`Minter` turns
``(to_address, token_id)`` into a transaction hash:

* :class:`MockMinter` fabricates a hash locally (minting disabled).
* :class:`HttpMinter` asks an external relay over HTTP.

:func:`mint_user_credential` is the admin operation built on top: it
mints the user's ``nft_id`` and records the pending transaction.
"""

from __future__ import annotations

import hashlib
import logging
from typing import TYPE_CHECKING, Protocol

import httpx
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from digital_bhutan.database.engine import get_session
from digital_bhutan.database.models import AdminActionType, BlockchainTransaction, User
from digital_bhutan.services.admin_service import log_admin_action, row_to_dict
from digital_bhutan.services.errors import AlreadyMinted, MintError, UserNotFound
from digital_bhutan.services.user_service import mock_token_id

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from digital_bhutan.config import MintingConfig

logger = logging.getLogger(__name__)

NFT_MINT = "nft_mint"


class Minter(Protocol):
    def mint(self, to_address: str, token_id: str) -> str:
        """Mint *token_id* to *to_address* and return the transaction hash."""
        ...


class MockMinter:
    """Offline minter.  The hash is a pure function of its inputs."""

    def mint(self, to_address: str, token_id: str) -> str:
        digest = hashlib.sha256(f"{to_address}:{token_id}".encode()).hexdigest()
        return f"0x{digest}"


class HttpMinter:
    """Relay-backed minter.

    POSTs ``{toAddress, tokenId, contractAddress}`` to *relay_url* and
    expects ``{"txHash": "0x..."}`` back.  Any transport error, non-2xx
    status or missing hash raises :class:`MintError`.
    """

    def __init__(
        self,
        relay_url: str,
        *,
        contract_address: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.relay_url = relay_url
        self.contract_address = contract_address
        self.timeout = timeout
        self._transport = transport or httpx.HTTPTransport(retries=1)

    def mint(self, to_address: str, token_id: str) -> str:
        payload = {
            "toAddress": to_address,
            "tokenId": token_id,
            "contractAddress": self.contract_address,
        }
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                resp = client.post(self.relay_url, json=payload)
                resp.raise_for_status()
                body = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Minting relay call failed: %s", exc)
            raise MintError("Minting relay unavailable") from exc

        tx_hash = body.get("txHash") if isinstance(body, dict) else None
        if not tx_hash:
            raise MintError("Minting relay returned no transaction hash")
        return tx_hash


def get_minter(cfg: MintingConfig) -> Minter:
    """Pick the minter for the configured ``minting`` block."""
    if cfg.enabled and cfg.relay_url:
        return HttpMinter(
            cfg.relay_url,
            contract_address=cfg.contract_address,
            timeout=cfg.timeout_seconds,
        )
    return MockMinter()


def _has_mint(session: Session, user_id: int) -> bool:
    return session.scalar(
        select(BlockchainTransaction.id).where(
            BlockchainTransaction.user_id == user_id,
            BlockchainTransaction.transaction_type == NFT_MINT,
        )
    ) is not None


def mint_user_credential(
    engine: Engine,
    minter: Minter,
    user_id: int,
    to_address: str,
    actor_id: int,
) -> BlockchainTransaction:
    """Mint *user_id*'s credential NFT to *to_address*.

    The relay call happens outside any transaction; nothing is recorded
    when it fails.  A user whose token already has an ``nft_mint`` record
    raises :class:`AlreadyMinted`, checked again under a row lock after the
    relay call so concurrent mints record at most one transaction.
    """
    with get_session(engine) as session:
        user = session.get(User, user_id)
        if user is None:
            raise UserNotFound(user_id)
        if not user.nft_id:
            user.nft_id = mock_token_id("nft")
        token_id = user.nft_id
        if _has_mint(session, user_id):
            raise AlreadyMinted(user_id)

    tx_hash = minter.mint(to_address, token_id)

    with get_session(engine) as session:
        # Re-check under the user row lock; a concurrent mint may have landed.
        session.get(User, user_id, with_for_update=True)
        if _has_mint(session, user_id):
            raise AlreadyMinted(user_id)

        tx = BlockchainTransaction(
            user_id=user_id,
            transaction_hash=tx_hash,
            transaction_type=NFT_MINT,
            to_address=to_address,
            status="pending",
            metadata_={"token_id": token_id},
        )
        session.add(tx)
        try:
            session.flush()
        except IntegrityError as exc:
            raise AlreadyMinted(user_id) from exc
        log_admin_action(
            session,
            actor_id=actor_id,
            action_type=AdminActionType.NFT_MINT,
            target_table="blockchain_transactions",
            target_id=str(tx.id),
            before=None,
            after=row_to_dict(tx),
        )
        session.flush()
        session.refresh(tx)

    logger.info("Minted %s to %s for user %d (tx %s)", token_id, to_address, user_id, tx_hash)
    return tx
