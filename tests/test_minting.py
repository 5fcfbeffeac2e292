"""
tests/test_minting.py — Credential Minting
===========================================
The relay is replaced by ``httpx.MockTransport`` so no network is used.
"""

from __future__ import annotations

import json

import httpx
import pytest
from conftest import make_user
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from digital_bhutan.config import MintingConfig
from digital_bhutan.database.models import AdminLog, BlockchainTransaction
from digital_bhutan.services.errors import AlreadyMinted, MintError, UserNotFound
from digital_bhutan.services.minting import (
    HttpMinter,
    MockMinter,
    get_minter,
    mint_user_credential,
)


def _relay(handler) -> HttpMinter:
    return HttpMinter(
        "https://relay.example/mint",
        contract_address="0xcontract",
        transport=httpx.MockTransport(handler),
    )


class TestMockMinter:
    def test_deterministic_hash(self):
        minter = MockMinter()
        first = minter.mint("0xabc", "nft_1")
        assert first == minter.mint("0xabc", "nft_1")
        assert first != minter.mint("0xabc", "nft_2")
        assert first.startswith("0x") and len(first) == 66


class TestHttpMinter:
    def test_posts_payload_and_returns_hash(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"txHash": "0xfeed"})

        assert _relay(handler).mint("0xabc", "nft_9") == "0xfeed"
        assert seen["body"] == {
            "toAddress": "0xabc",
            "tokenId": "nft_9",
            "contractAddress": "0xcontract",
        }

    def test_server_error_raises_mint_error(self):
        minter = _relay(lambda request: httpx.Response(503))
        with pytest.raises(MintError):
            minter.mint("0xabc", "nft_9")

    def test_missing_hash_raises_mint_error(self):
        minter = _relay(lambda request: httpx.Response(200, json={"ok": True}))
        with pytest.raises(MintError):
            minter.mint("0xabc", "nft_9")

    def test_connection_error_raises_mint_error(self):
        def handler(request):
            raise httpx.ConnectError("relay down", request=request)

        with pytest.raises(MintError) as exc_info:
            _relay(handler).mint("0xabc", "nft_9")
        assert exc_info.value.status_code == 502


class TestGetMinter:
    def test_disabled_uses_mock(self):
        assert isinstance(get_minter(MintingConfig()), MockMinter)

    def test_enabled_without_url_uses_mock(self):
        assert isinstance(get_minter(MintingConfig(enabled=True)), MockMinter)

    def test_enabled_with_url_uses_relay(self):
        minter = get_minter(MintingConfig(enabled=True, relay_url="https://relay.example/mint"))
        assert isinstance(minter, HttpMinter)


class TestMintUserCredential:
    def test_records_pending_transaction_and_audit(self, db_engine):
        user = make_user(db_engine)
        tx = mint_user_credential(db_engine, MockMinter(), user.id, "0xabc", actor_id=7)

        assert tx.transaction_type == "nft_mint"
        assert tx.status == "pending"
        assert tx.to_address == "0xabc"
        with Session(db_engine) as session:
            (entry,) = session.scalars(select(AdminLog)).all()
        assert entry.action_type == "NFT_MINT"
        assert entry.actor_id == 7

    def test_relay_failure_records_nothing(self, db_engine):
        user = make_user(db_engine)
        minter = _relay(lambda request: httpx.Response(500))
        with pytest.raises(MintError):
            mint_user_credential(db_engine, minter, user.id, "0xabc", actor_id=7)
        with Session(db_engine) as session:
            assert session.scalar(
                select(func.count()).select_from(BlockchainTransaction)
            ) == 0

    def test_already_minted(self, db_engine):
        user = make_user(db_engine)
        mint_user_credential(db_engine, MockMinter(), user.id, "0xabc", actor_id=7)
        with pytest.raises(AlreadyMinted):
            mint_user_credential(db_engine, MockMinter(), user.id, "0xabc", actor_id=7)

    def test_unknown_user(self, db_engine):
        with pytest.raises(UserNotFound):
            mint_user_credential(db_engine, MockMinter(), 404, "0xabc", actor_id=7)

    def test_concurrent_mint_records_one_transaction(self, db_engine):
        user = make_user(db_engine)

        class RacingMinter(MockMinter):
            """Another admin's mint lands while this relay call is in flight."""

            def mint(self, to_address, token_id):
                with Session(db_engine) as session:
                    session.add(BlockchainTransaction(
                        user_id=user.id,
                        transaction_hash="0xother",
                        transaction_type="nft_mint",
                        status="pending",
                    ))
                    session.commit()
                return super().mint(to_address, token_id)

        with pytest.raises(AlreadyMinted):
            mint_user_credential(db_engine, RacingMinter(), user.id, "0xabc", actor_id=7)
        with Session(db_engine) as session:
            hashes = session.scalars(select(BlockchainTransaction.transaction_hash)).all()
            assert hashes == ["0xother"]
            assert session.scalars(select(AdminLog)).all() == []

    def test_duplicate_transaction_hash_is_conflict(self, db_engine):
        user = make_user(db_engine)
        other = make_user(db_engine, email="pema@example.bt")
        with Session(db_engine) as session:
            session.add(BlockchainTransaction(
                user_id=other.id,
                transaction_hash="0xdup",
                transaction_type="token_transfer",
                status="confirmed",
            ))
            session.commit()

        class FixedMinter:
            def mint(self, to_address, token_id):
                return "0xdup"

        with pytest.raises(AlreadyMinted):
            mint_user_credential(db_engine, FixedMinter(), user.id, "0xabc", actor_id=7)
