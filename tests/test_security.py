import hashlib
import unittest

from auth.security import hash_from_bytes, hash_from_string, hash_password, verify_password


class TestHashing(unittest.TestCase):
    def test_digest_is_fixed_length_hex(self):
        for value in ["", "a", "x" * 1000]:
            digest = hash_from_string(value)
            self.assertEqual(len(digest), 64)
            self.assertEqual(digest, digest.lower())
            int(digest, 16)

    def test_bytes_and_string_hash_agree(self):
        self.assertEqual(hash_from_bytes(b"abc"), hash_from_string("abc"))
        self.assertEqual(hash_from_bytes(b"abc"), hashlib.sha256(b"abc").hexdigest())

    def test_password_hash_is_digest_of_password_plus_salt(self):
        self.assertEqual(hash_password("secret1", "s1"), hashlib.sha256(b"secret1s1").hexdigest())

    def test_salt_changes_the_hash(self):
        self.assertNotEqual(hash_password("secret1", "s1"), hash_password("secret1", "s2"))


class TestVerifyPassword(unittest.TestCase):
    def setUp(self):
        self.stored = hash_password("secret1", "s1")

    def test_correct_password(self):
        self.assertTrue(verify_password("secret1", "s1", self.stored))

    def test_wrong_password(self):
        self.assertFalse(verify_password("wrong", "s1", self.stored))

    def test_wrong_salt(self):
        self.assertFalse(verify_password("secret1", "s2", self.stored))

    def test_truncated_hash_does_not_match(self):
        self.assertFalse(verify_password("secret1", "s1", self.stored[:-1]))


if __name__ == "__main__":
    unittest.main()
