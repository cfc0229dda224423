import pytest

from loramote.aes import (
    AesMode,
    compute_mic,
    ctr_crypt,
    encrypt_block,
    expand_key,
    process,
)

NIST_KEY = bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c")
NIST_MSG = bytes.fromhex(
    "6bc1bee22e409f96e93d7e117393172a"
    "ae2d8a571e03ac9c9eb76fac45af8e51"
    "30c81c46a35ce411e5fbc1191a0a52ef"
    "f69f2445df4f9b17ad2b417be66c3710"
)
AUX = bytes(range(0x40, 0x50))


def test_fips197_block():
    key = bytes(range(16))
    plaintext = bytes.fromhex("00112233445566778899aabbccddeeff")
    assert encrypt_block(key, plaintext) == bytes.fromhex(
        "69c4e0d86a7b0430d8cdb78070b4c55a"
    )


def test_key_expansion_known_words():
    words = expand_key(NIST_KEY)
    assert len(words) == 44
    assert words[0] == int.from_bytes(NIST_KEY[:4], "big")
    assert words[4] == 0xA0FAFE17
    assert words[43] == 0xB6630CA6


def test_ecb_known_answer():
    out, _ = process(AesMode.ENC, NIST_KEY, NIST_MSG[:16])
    assert out == bytes.fromhex("3ad77bb40d7a3660a89ecaf32466ef97")


def test_ecb_multiple_blocks_match_single_blocks():
    out, word = process(AesMode.ENC, NIST_KEY, NIST_MSG, AUX)
    assert len(out) == 64
    assert out[16:32] == encrypt_block(NIST_KEY, NIST_MSG[16:32])
    assert word == int.from_bytes(AUX[:4], "big")


def test_ecb_partial_block_is_padded():
    out, _ = process(AesMode.ENC, NIST_KEY, b"abcde")
    padded = b"abcde" + b"\x80" + bytes(10)
    assert out == encrypt_block(NIST_KEY, padded)


def test_ctr_known_answer():
    counter = bytes.fromhex("f0f1f2f3f4f5f6f7f8f9fafbfcfdfeff")
    out = ctr_crypt(NIST_KEY, counter, NIST_MSG[:16])
    assert out == bytes.fromhex("874d6191b620e3261bef6864990db6ce")


def test_ctr_round_trip():
    data = b"hello lorawan payload of odd length!"
    enc = ctr_crypt(NIST_KEY, AUX, data)
    assert len(enc) == len(data)
    assert ctr_crypt(NIST_KEY, AUX, enc) == data


def test_ctr_counter_increments_last_word():
    data = bytes(32)
    out = ctr_crypt(NIST_KEY, AUX, data)
    next_counter = AUX[:12] + (int.from_bytes(AUX[12:], "big") + 1).to_bytes(4, "big")
    assert out[:16] == encrypt_block(NIST_KEY, AUX)
    assert out[16:] == encrypt_block(NIST_KEY, next_counter)


def test_ctr_counter_wraps():
    aux = AUX[:12] + b"\xff\xff\xff\xff"
    out = ctr_crypt(NIST_KEY, aux, bytes(32))
    assert out[16:] == encrypt_block(NIST_KEY, AUX[:12] + bytes(4))


def test_process_ctr_matches_ctr_crypt():
    data = b"some frame payload"
    out, word = process(AesMode.CTR, NIST_KEY, data, AUX)
    assert out == ctr_crypt(NIST_KEY, AUX, data)
    assert word == int.from_bytes(AUX[:4], "big")


def test_cmac_one_block():
    assert compute_mic(NIST_KEY, NIST_MSG[:16]) == 0x070A16B4


def test_cmac_partial_block():
    assert compute_mic(NIST_KEY, NIST_MSG[:40]) == 0xDFA66747


def test_cmac_four_blocks():
    assert compute_mic(NIST_KEY, NIST_MSG) == 0x51F0BEBF


def test_mic_with_aux_equals_mic_over_prefixed_message():
    data = b"uplink frame"
    assert compute_mic(NIST_KEY, data, AUX) == compute_mic(NIST_KEY, AUX + data)


def test_mic_with_aux_and_no_data_is_encrypted_aux():
    expected = int.from_bytes(encrypt_block(NIST_KEY, AUX)[:4], "big")
    assert compute_mic(NIST_KEY, b"", AUX) == expected


def test_mic_without_aux_and_no_data_is_zero():
    assert compute_mic(NIST_KEY, b"") == 0


def test_process_mic_leaves_data_unchanged():
    data = b"join request body"
    out, word = process(AesMode.MIC, NIST_KEY, data, AUX)
    assert out == data
    assert word == compute_mic(NIST_KEY, data, AUX)


def test_process_mic_noaux_ignores_aux():
    data = NIST_MSG[:16]
    _, word = process(AesMode.MIC | AesMode.MICNOAUX, NIST_KEY, data, AUX)
    assert word == compute_mic(NIST_KEY, data)


def test_mic_changes_with_data():
    assert compute_mic(NIST_KEY, b"abc", AUX) != compute_mic(NIST_KEY, b"abd", AUX)
    assert compute_mic(NIST_KEY, b"abc", AUX) == compute_mic(NIST_KEY, b"abc", AUX)


@pytest.mark.parametrize("key", [b"", bytes(15), bytes(17)])
def test_bad_key_length(key):
    with pytest.raises(ValueError):
        expand_key(key)


def test_bad_block_length():
    with pytest.raises(ValueError):
        encrypt_block(NIST_KEY, bytes(15))


def test_bad_aux_length():
    with pytest.raises(ValueError):
        ctr_crypt(NIST_KEY, bytes(8), b"data")
    with pytest.raises(ValueError):
        compute_mic(NIST_KEY, b"data", bytes(20))