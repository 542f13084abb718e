import unittest

from utils.web3_utils import encode_v3_path, ether_to_wei, gwei_to_wei, normalize_address, same_address

CHECKSUMMED = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


class NormalizeAddressTests(unittest.TestCase):
    def test_lower_and_upper_case_map_to_checksum(self) -> None:
        self.assertEqual(normalize_address(CHECKSUMMED.lower()), CHECKSUMMED)
        self.assertEqual(normalize_address("0x" + CHECKSUMMED[2:].upper()), CHECKSUMMED)

    def test_is_idempotent(self) -> None:
        for raw in (CHECKSUMMED, CHECKSUMMED.lower(), "0x" + "ab" * 20):
            once = normalize_address(raw)
            self.assertEqual(normalize_address(once), once)

    def test_rejects_non_addresses(self) -> None:
        for bad in ("", "0x1234", "0x" + "zz" * 20, None):
            with self.assertRaises(ValueError):
                normalize_address(bad)

    def test_same_address_ignores_case(self) -> None:
        self.assertTrue(same_address(CHECKSUMMED, CHECKSUMMED.lower()))
        self.assertFalse(same_address(CHECKSUMMED, "0x" + "11" * 20))


class UnitsTests(unittest.TestCase):
    def test_gwei_to_wei(self) -> None:
        self.assertEqual(gwei_to_wei("42"), 42_000_000_000)
        self.assertEqual(gwei_to_wei("1.5"), 1_500_000_000)

    def test_ether_to_wei(self) -> None:
        self.assertEqual(ether_to_wei("0.1"), 10**17)


class EncodeV3PathTests(unittest.TestCase):
    def test_single_hop_layout(self) -> None:
        a = "0x" + "11" * 20
        b = "0x" + "22" * 20
        encoded = encode_v3_path([a, b], [3000])
        self.assertEqual(len(encoded), 43)
        self.assertEqual(encoded[:20], bytes.fromhex("11" * 20))
        self.assertEqual(encoded[20:23], (3000).to_bytes(3, "big"))
        self.assertEqual(encoded[23:], bytes.fromhex("22" * 20))

    def test_rejects_mismatched_fees(self) -> None:
        with self.assertRaises(ValueError):
            encode_v3_path(["0x" + "11" * 20, "0x" + "22" * 20], [500, 3000])


if __name__ == "__main__":
    unittest.main()
