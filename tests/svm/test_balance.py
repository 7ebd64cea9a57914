"""Tests for the WSOL balance gate."""

import pytest
from solders.pubkey import Pubkey
from spl.token.constants import WRAPPED_SOL_MINT

from conftest import make_account_response, make_mock_rpc

from deep_thought.constants import WSOL_MINT
from deep_thought.svm.balance import format_sol, get_token_balance, get_wsol_balance
from deep_thought.svm.transaction import get_associated_token_address_for_owner


@pytest.mark.asyncio
class TestGetWsolBalance:
    """Tests for get_wsol_balance."""

    async def test_returns_parsed_amount(self, keypair):
        rpc = make_mock_rpc(balance=4_200_000)

        balance = await get_wsol_balance(rpc, keypair.pubkey())

        assert balance == 4_200_000

    async def test_looks_up_associated_token_account(self, keypair):
        """Test the derived ATA is what gets queried."""
        rpc = make_mock_rpc(balance=1)

        await get_wsol_balance(rpc, keypair.pubkey())

        expected = get_associated_token_address_for_owner(WRAPPED_SOL_MINT, keypair.pubkey())
        rpc.get_account_info_json_parsed.assert_awaited_once_with(expected)

    async def test_missing_account_is_zero(self, keypair):
        """Test an owner without a WSOL account has zero balance."""
        rpc = make_mock_rpc(balance=None)

        assert await get_wsol_balance(rpc, keypair.pubkey()) == 0

    async def test_rpc_error_is_zero(self, keypair):
        """Test lookup failures never propagate."""
        rpc = make_mock_rpc()
        rpc.get_account_info_json_parsed.side_effect = ConnectionError("rpc down")

        assert await get_wsol_balance(rpc, keypair.pubkey()) == 0

    async def test_unexpected_shape_is_zero(self, keypair):
        rpc = make_mock_rpc()
        response = make_account_response(1)
        response.value.data.parsed = {"info": {}}
        rpc.get_account_info_json_parsed.return_value = response

        assert await get_wsol_balance(rpc, keypair.pubkey()) == 0

    async def test_accepts_string_mint(self, keypair):
        rpc = make_mock_rpc(balance=7)

        assert await get_token_balance(rpc, keypair.pubkey(), WSOL_MINT) == 7
        assert Pubkey.from_string(WSOL_MINT) == WRAPPED_SOL_MINT


class TestFormatSol:
    """Tests for format_sol."""

    def test_price(self):
        assert format_sol(4_200_000) == "0.0042"

    def test_wrap_amount(self):
        assert format_sol(5_000_000) == "0.005"

    def test_zero(self):
        assert format_sol(0) == "0"

    def test_whole_sol(self):
        assert format_sol(2_000_000_000) == "2"
