from __future__ import annotations

import hashlib
import re

import pytest

from unique_id.hashing import MAX_HASH_LENGTH, sha256_base64, sha256_digest, short_hash

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def test_sha256_base64_of_source_text() -> None:
    assert sha256_base64("foo();") == "qMVaiPhbudnaz91QqECVnbdTvKWnqeultnb/Nt/ybo8="
    assert (
        sha256_base64("foo();bar();")
        == "Hf6KrDIS2z5zTl6j1nhBNnR3ltseJwfpVwUf3mSniBA="
    )


def test_sha256_digest_is_32_bytes_of_utf8() -> None:
    assert len(sha256_digest("")) == 32
    assert sha256_digest("é") == hashlib.sha256("é".encode("utf-8")).digest()


@pytest.mark.parametrize(
    ("id_string", "expected"),
    [
        ("code:qMVaiPhbudnaz91QqECVnbdTvKWnqeultnb/Nt/ybo8=:0", "AcQ5z4Sv"),
        ("code:Hf6KrDIS2z5zTl6j1nhBNnR3ltseJwfpVwUf3mSniBA=:0", "SMKDpy00"),
        ("code:Hf6KrDIS2z5zTl6j1nhBNnR3ltseJwfpVwUf3mSniBA=:1", "CRLVr5wz"),
        ("path:test/foo.js:0", "DxNA_4Ob"),
        ("path:test/bar.js:0", "CBaVcMlU"),
        ("path:test/bar.js:1", "Cn86cOWC"),
    ],
)
def test_short_hash_reference_values(id_string: str, expected: str) -> None:
    assert short_hash(id_string, 8) == expected


def test_short_hash_prefixes_are_consistent() -> None:
    full = short_hash("path:test/foo.js:0", MAX_HASH_LENGTH)

    assert len(full) == MAX_HASH_LENGTH
    for length in (1, 8, 20, 40):
        assert short_hash("path:test/foo.js:0", length) == full[:length]


def test_short_hash_is_identifier_safe() -> None:
    for index in range(500):
        token = short_hash(f"code:sample:{index}", MAX_HASH_LENGTH)
        assert _IDENTIFIER.match(token), token
        assert not token[0].isdigit()
        assert token[0] in "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdef"
