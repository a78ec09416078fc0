"""Unit tests for the codec: base64, PHC strings, per-algorithm decoding."""

from __future__ import annotations

import pytest

from mp_passhash import codec
from mp_passhash.codec import DerivedHash, b64decode, b64encode, phc
from mp_passhash.kernel.errors import (
    InvalidDigestAlgorithmError,
    InvalidHashFormatError,
    UnknownAlgorithmError,
)
from mp_passhash.preferences import (
    Algorithm,
    Argon2Preferences,
    Argon2Type,
    Argon2Version,
    BCryptMinorVersion,
    BCryptPreferences,
    DigestAlgorithm,
    HMACPreferences,
    PBKDF2Preferences,
    PlainHashPreferences,
    PlainHashSaltPreferences,
    SCryptPreferences,
)

SALT = bytes(range(16))
DIGEST = bytes(range(100, 132))


# ---------------------------------------------------------------------------
# Base64
# ---------------------------------------------------------------------------


class TestBase64:
    def test_padding_stripped(self) -> None:
        assert b64encode(b"a") == "YQ"
        assert b64encode(bytes(32)).endswith("A")
        assert "=" not in b64encode(bytes(32))

    def test_decodes_unpadded(self) -> None:
        assert b64decode("YQ") == b"a"

    def test_tolerates_padding(self) -> None:
        assert b64decode("YQ==") == b"a"

    def test_empty(self) -> None:
        assert b64encode(b"") == ""
        assert b64decode("") == b""

    def test_invalid_characters(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            b64decode("!!!")

    def test_impossible_length(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            b64decode("A")


# ---------------------------------------------------------------------------
# PHC
# ---------------------------------------------------------------------------


class TestPHC:
    def test_serialize_full(self) -> None:
        encoded = phc.serialize(
            phc.PHCString(id="argon2id", version=19, params={"m": "2048", "t": "2", "p": "1"}, salt=b"a", hash=b"b")
        )
        assert encoded == "$argon2id$v=19$m=2048,t=2,p=1$YQ$Yg"

    def test_serialize_without_version(self) -> None:
        encoded = phc.serialize(phc.PHCString(id="s2", params={"n": "16"}, salt=b"a", hash=b"b"))
        assert encoded == "$s2$n=16$YQ$Yg"

    def test_hash_without_salt_rejected(self) -> None:
        with pytest.raises(ValueError):
            phc.serialize(phc.PHCString(id="s2", hash=b"b"))

    def test_deserialize(self) -> None:
        parsed = phc.deserialize("$argon2i$v=16$m=4096,t=3,p=2$YWJjZGVmZ2g$aGFzaA")
        assert parsed.id == "argon2i"
        assert parsed.version == 16
        assert parsed.params == {"m": "4096", "t": "3", "p": "2"}
        assert parsed.salt == b"abcdefgh"
        assert parsed.hash == b"hash"

    def test_deserialize_id_only(self) -> None:
        parsed = phc.deserialize("$s2")
        assert parsed.params == {}
        assert parsed.salt is None and parsed.hash is None

    def test_deserialize_rejects_extra_segments(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            phc.deserialize("$s2$n=1$YQ$Yg$Yg")

    def test_deserialize_rejects_bad_param(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            phc.deserialize("$s2$n=1,r$YQ$Yg")

    def test_int_param_requires_ascii_digits(self) -> None:
        parsed = phc.PHCString(id="s2", params={"n": "²", "r": "-8", "p": "1"})
        for name in ("n", "r"):
            with pytest.raises(InvalidHashFormatError):
                phc.int_param(parsed, name)
        assert phc.int_param(parsed, "p") == 1

    def test_int_param(self) -> None:
        parsed = phc.deserialize("$s2$n=1024,r=x$YQ$Yg")
        assert phc.int_param(parsed, "n") == 1024
        with pytest.raises(InvalidHashFormatError):
            phc.int_param(parsed, "r")
        with pytest.raises(InvalidHashFormatError):
            phc.int_param(parsed, "p")


# ---------------------------------------------------------------------------
# Encoding per algorithm
# ---------------------------------------------------------------------------


class TestEncode:
    def test_plain_hash(self) -> None:
        prefs = PlainHashPreferences(digest_algorithm=DigestAlgorithm.SHA256)
        assert codec.encode(prefs, DerivedHash(digest=DIGEST)) == f"$5${b64encode(DIGEST)}"

    def test_plain_hash_salt_uses_short_code(self) -> None:
        prefs = PlainHashSaltPreferences(digest_algorithm=DigestAlgorithm.MD5, salt_length=16)
        encoded = codec.encode(prefs, DerivedHash(digest=DIGEST, salt=SALT))
        assert encoded == f"$1${b64encode(SALT)}${b64encode(DIGEST)}"

    def test_hmac_uses_digest_name(self) -> None:
        prefs = HMACPreferences(digest_algorithm=DigestAlgorithm.SHA256, salt_length=16)
        encoded = codec.encode(prefs, DerivedHash(digest=DIGEST, salt=SALT))
        assert encoded.startswith("$hmac-sha256$")

    def test_pbkdf2(self) -> None:
        prefs = PBKDF2Preferences(
            digest_algorithm=DigestAlgorithm.SHA1, salt_length=16, iterations=777, hash_length=32,
        )
        encoded = codec.encode(prefs, DerivedHash(digest=DIGEST, salt=SALT))
        assert encoded == f"$pbkdf2-sha1$777${b64encode(SALT)}${b64encode(DIGEST)}"

    def test_scrypt(self) -> None:
        prefs = SCryptPreferences(hash_length=32, salt_length=16, cost=16384, block_size=8, parallelization=1)
        encoded = codec.encode(prefs, DerivedHash(digest=DIGEST, salt=SALT))
        assert encoded == f"$s2$n=16384,r=8,p=1${b64encode(SALT)}${b64encode(DIGEST)}"

    def test_argon2(self) -> None:
        prefs = Argon2Preferences(
            type=Argon2Type.I, version=Argon2Version.V1_0, hash_length=32, salt_length=16,
            memory_cost=4096, time_cost=3, parallelism=2,
        )
        encoded = codec.encode(prefs, DerivedHash(digest=DIGEST, salt=SALT))
        assert encoded == f"$argon2i$v=16$m=4096,t=3,p=2${b64encode(SALT)}${b64encode(DIGEST)}"

    def test_bcrypt_passes_native_string_through(self) -> None:
        native = b"$2b$04$abcdefghijklmnopqrstuu" + b"x" * 31
        assert codec.encode(BCryptPreferences(), DerivedHash(digest=native)) == native.decode()


# ---------------------------------------------------------------------------
# Decoding per algorithm
# ---------------------------------------------------------------------------


class TestDecode:
    def test_plain_hash(self) -> None:
        assert codec.decode(f"$6${b64encode(DIGEST)}") == PlainHashPreferences(
            digest_algorithm=DigestAlgorithm.SHA512,
        )

    def test_plain_hash_salt(self) -> None:
        decoded = codec.decode(f"$sha1${b64encode(SALT[:5])}${b64encode(DIGEST)}")
        assert decoded == PlainHashSaltPreferences(digest_algorithm=DigestAlgorithm.SHA1, salt_length=5)

    def test_empty_salt_segment(self) -> None:
        decoded = codec.decode(f"$5$${b64encode(DIGEST)}")
        assert decoded == PlainHashSaltPreferences(digest_algorithm=DigestAlgorithm.SHA256, salt_length=0)

    def test_hmac(self) -> None:
        decoded = codec.decode(f"$hmac-md5${b64encode(SALT)}${b64encode(DIGEST)}")
        assert decoded == HMACPreferences(digest_algorithm=DigestAlgorithm.MD5, salt_length=16)

    def test_hmac_digest_case_insensitive(self) -> None:
        decoded = codec.decode(f"$hmac-SHA256${b64encode(SALT)}${b64encode(DIGEST)}")
        assert decoded.digest_algorithm is DigestAlgorithm.SHA256

    def test_pbkdf2(self) -> None:
        decoded = codec.decode(f"$pbkdf2-sha512$5000${b64encode(SALT)}${b64encode(DIGEST)}")
        assert decoded == PBKDF2Preferences(
            digest_algorithm=DigestAlgorithm.SHA512, salt_length=16, iterations=5000, hash_length=32,
        )

    def test_pbkdf2_unparsable_iterations_fall_back_to_default(self) -> None:
        decoded = codec.decode(f"$pbkdf2-sha256$many${b64encode(SALT)}${b64encode(DIGEST)}")
        assert decoded.iterations == 1

    @pytest.mark.parametrize("iterations", ["-5", " 7", "1_000", "+3", "٣"])
    def test_pbkdf2_iterations_must_be_ascii_digits(self, iterations: str) -> None:
        decoded = codec.decode(f"$pbkdf2-sha256${iterations}${b64encode(SALT)}${b64encode(DIGEST)}")
        assert decoded.iterations == 1

    def test_bcrypt(self) -> None:
        decoded = codec.decode("$2a$12$" + "a" * 53)
        assert decoded == BCryptPreferences(minor_version=BCryptMinorVersion.A, rounds=12)

    def test_scrypt_lengths_from_bytes(self) -> None:
        decoded = codec.decode(f"$s2$n=1024,r=4,p=2${b64encode(SALT[:7])}${b64encode(DIGEST[:20])}")
        assert decoded == SCryptPreferences(hash_length=20, salt_length=7, cost=1024, block_size=4, parallelization=2)

    def test_argon2(self) -> None:
        decoded = codec.decode(f"$argon2id$v=19$m=65536,t=3,p=4${b64encode(SALT)}${b64encode(DIGEST)}")
        assert decoded == Argon2Preferences(
            type=Argon2Type.ID, version=Argon2Version.V1_3, hash_length=32, salt_length=16,
            memory_cost=65536, time_cost=3, parallelism=4,
        )

    def test_codec_for_every_algorithm(self) -> None:
        assert {codec.codec_for(a).algorithm for a in Algorithm} == set(Algorithm)


class TestDecodeErrors:
    @pytest.mark.parametrize("encoded", ["not-a-hash", "", "$", "$5", "5$abc"])
    def test_invalid_format(self, encoded: str) -> None:
        with pytest.raises(InvalidHashFormatError):
            codec.decode(encoded)

    @pytest.mark.parametrize("encoded", ["$bogus$xx", "$2y$10$abc", "$argon2x$v=19$m=1,t=1,p=1$YQ$Yg", "$7$abc"])
    def test_unknown_algorithm(self, encoded: str) -> None:
        with pytest.raises(UnknownAlgorithmError):
            codec.decode(encoded)

    def test_unknown_algorithm_keeps_identifier(self) -> None:
        with pytest.raises(UnknownAlgorithmError) as exc_info:
            codec.decode("$bogus$xx")
        assert exc_info.value.identifier == "bogus"
        assert exc_info.value.code == "unknown_algorithm"

    @pytest.mark.parametrize("prefix", ["hmac-sha3", "pbkdf2-whirlpool"])
    def test_invalid_digest(self, prefix: str) -> None:
        with pytest.raises(InvalidDigestAlgorithmError):
            codec.decode(f"${prefix}$1$YQ$Yg")

    def test_digest_short_code_with_too_many_segments(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            codec.decode("$5$YQ$Yg$Yg")

    def test_hmac_missing_segments(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            codec.decode("$hmac-sha1$YQ")

    def test_pbkdf2_missing_segments(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            codec.decode("$pbkdf2-sha1$10$YQ")

    def test_bcrypt_non_numeric_cost(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            codec.decode("$2b$xx$" + "a" * 53)

    @pytest.mark.parametrize("cost", ["²", "٣", "-4", "+4", "4 "])
    def test_bcrypt_cost_must_be_ascii_digits(self, cost: str) -> None:
        with pytest.raises(InvalidHashFormatError):
            codec.decode(f"$2b${cost}$" + "a" * 53)

    def test_argon2_non_numeric_param(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            codec.decode("$argon2id$v=19$m=lots,t=2,p=1$YWJjZGVmZ2g$aGFzaA")

    def test_argon2_missing_param(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            codec.decode("$argon2id$v=19$m=2048,t=2$YWJjZGVmZ2g$aGFzaA")

    def test_argon2_without_version(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            codec.decode("$argon2id$m=2048,t=2,p=1$YWJjZGVmZ2g$aGFzaA")

    def test_argon2_unsupported_version(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            codec.decode("$argon2id$v=18$m=2048,t=2,p=1$YWJjZGVmZ2g$aGFzaA")

    def test_scrypt_missing_param(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            codec.decode("$s2$n=1024,r=8$YQ$Yg")

    def test_scrypt_missing_hash(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            codec.decode("$s2$n=1024,r=8,p=1$YQ")

    def test_bad_base64(self) -> None:
        with pytest.raises(InvalidHashFormatError):
            codec.decode("$1$***$Yg")
