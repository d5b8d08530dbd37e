import hashlib
import unittest
from unittest.mock import patch

from cryptex import KEY_SIZE, KeyDerivationError, derive_key, derived_key, generate_salt


class TestDeriveKey(unittest.TestCase):

    def test_matches_reference_pbkdf2(self):
        key = derive_key(b"correct-horse-battery-staple", b"pepper")
        expected = hashlib.pbkdf2_hmac(
            "sha256", b"correct-horse-battery-staple", b"pepper", 10000, 32
        )
        self.assertEqual(bytes(key), expected)

    def test_deterministic(self):
        salt = generate_salt()
        self.assertEqual(derive_key(b"hunter2", salt), derive_key(b"hunter2", salt))

    def test_string_and_bytes_passphrase_agree(self):
        self.assertEqual(derive_key("päßword", b"salt"), derive_key("päßword".encode(), b"salt"))

    def test_missing_salt_is_empty_salt(self):
        with self.assertLogs("cryptex.kdf", level="WARNING"):
            without = derive_key(b"hunter2")
        with self.assertLogs("cryptex.kdf", level="WARNING"):
            empty = derive_key(b"hunter2", b"")
        self.assertEqual(without, empty)
        self.assertEqual(
            bytes(without), hashlib.pbkdf2_hmac("sha256", b"hunter2", b"", 10000, 32)
        )

    def test_empty_passphrase_is_valid(self):
        with self.assertLogs("cryptex.kdf", level="WARNING") as logs:
            key = derive_key(b"", b"salt")
        self.assertEqual(len(key), KEY_SIZE)
        self.assertTrue(any("empty passphrase" in line for line in logs.output))

    def test_require_salt(self):
        with self.assertRaises(KeyDerivationError):
            derive_key(b"hunter2", None, require_salt=True)
        with self.assertRaises(KeyDerivationError):
            derive_key(b"hunter2", b"", require_salt=True)
        self.assertEqual(len(derive_key(b"hunter2", b"s", require_salt=True)), KEY_SIZE)

    def test_salt_changes_key(self):
        self.assertNotEqual(derive_key(b"hunter2", b"a"), derive_key(b"hunter2", b"b"))

    def test_library_failure_is_translated(self):
        with patch(
            "cryptex.kdf.PBKDF2HMAC", side_effect=ValueError("secret-leak hunter2")
        ):
            with self.assertRaises(KeyDerivationError) as cm:
                derive_key(b"hunter2", b"salt")
        self.assertNotIn("hunter2", str(cm.exception))
        self.assertIsInstance(cm.exception.__cause__, ValueError)

    def test_caller_buffers_are_not_modified(self):
        passphrase = bytearray(b"hunter2")
        salt = bytearray(b"salt")
        derive_key(passphrase, salt)
        self.assertEqual(passphrase, b"hunter2")
        self.assertEqual(salt, b"salt")


class TestDerivedKey(unittest.TestCase):

    def test_key_is_wiped_after_scope(self):
        with derived_key(b"hunter2", b"salt") as key:
            self.assertEqual(bytes(key), bytes(derive_key(b"hunter2", b"salt")))
        self.assertEqual(key, bytearray(KEY_SIZE))

    def test_key_is_wiped_on_error(self):
        with self.assertRaises(RuntimeError):
            with derived_key(b"hunter2", b"salt") as key:
                raise RuntimeError("boom")
        self.assertEqual(key, bytearray(KEY_SIZE))


class TestGenerateSalt(unittest.TestCase):

    def test_defaults(self):
        salt = generate_salt()
        self.assertIsInstance(salt, bytes)
        self.assertEqual(len(salt), 16)

    def test_custom_length(self):
        self.assertEqual(len(generate_salt(32)), 32)

    def test_invalid_length(self):
        with self.assertRaises(ValueError):
            generate_salt(0)

    def test_random(self):
        self.assertNotEqual(generate_salt(), generate_salt())


if __name__ == "__main__":
    unittest.main()
