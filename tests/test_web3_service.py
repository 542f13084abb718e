import unittest
from unittest.mock import MagicMock

from hexbytes import HexBytes

from services.web3_service import Web3Service
from tests.helpers import TEST_KEY, TEST_WALLET

LEGACY_TX = {
    "to": "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D",
    "value": 10**17,
    "gas": 250000,
    "gasPrice": 42 * 10**9,
    "nonce": 0,
    "chainId": 1,
    "data": "0x",
}


class Web3ServiceTests(unittest.TestCase):
    def test_construction_does_not_touch_the_node(self) -> None:
        w3s = Web3Service("http://127.0.0.1:1", TEST_KEY)
        self.assertEqual(w3s.address, TEST_WALLET)

    def test_sign_and_send_broadcasts_raw_transaction(self) -> None:
        w3 = MagicMock()
        w3.eth.send_raw_transaction.return_value = HexBytes("0x" + "12" * 32)
        w3s = Web3Service("http://node", TEST_KEY, w3=w3)

        tx_hash = w3s.sign_and_send(dict(LEGACY_TX))

        self.assertEqual(tx_hash, "0x" + "12" * 32)
        raw = w3.eth.send_raw_transaction.call_args.args[0]
        self.assertTrue(len(raw) > 0)

    def test_dry_run_signs_without_broadcast(self) -> None:
        w3 = MagicMock()
        w3s = Web3Service("http://node", TEST_KEY, dry_run=True, w3=w3)

        tx_hash = w3s.sign_and_send(dict(LEGACY_TX))

        self.assertTrue(tx_hash.startswith("0x"))
        self.assertEqual(len(tx_hash), 66)
        w3.eth.send_raw_transaction.assert_not_called()

    def test_base_tx_params_uses_pending_nonce(self) -> None:
        w3 = MagicMock()
        w3.eth.get_transaction_count.return_value = 9
        w3.eth.chain_id = 11155111
        w3s = Web3Service("http://node", TEST_KEY, w3=w3)

        params = w3s.base_tx_params(value=5)

        self.assertEqual(params, {"from": TEST_WALLET, "value": 5, "nonce": 9, "chainId": 11155111})
        w3.eth.get_transaction_count.assert_called_once_with(TEST_WALLET, "pending")


if __name__ == "__main__":
    unittest.main()
