"""AES-128 primitives used by the LoRaWAN MAC: block encryption, CTR and CMAC MIC."""

from __future__ import annotations

import enum
from collections.abc import Sequence

__all__ = [
    "AesMode",
    "expand_key",
    "encrypt_block",
    "ctr_crypt",
    "compute_mic",
    "process",
]

BLOCK_SIZE = 16
_ROUNDS = 10

_SBOX = bytes.fromhex(
    "637c777bf26b6fc53001672bfed7ab76"
    "ca82c97dfa5947f0add4a2af9ca472c0"
    "b7fd9326363ff7cc34a5e5f171d83115"
    "04c723c31896059a071280e2eb27b275"
    "09832c1a1b6e5aa0523bd6b329e32f84"
    "53d100ed20fcb15b6acbbe394a4c58cf"
    "d0efaafb434d338545f9027f503c9fa8"
    "51a3408f929d38f5bcb6da2110fff3d2"
    "cd0c13ec5f974417c4a77e3d645d1973"
    "60814fdc222a908846eeb814de5e0bdb"
    "e0323a0a4906245cc2d3ac629195e479"
    "e7c8376d8dd54ea96c56f4ea657aae08"
    "ba78252e1ca6b4c6e8dd741f4bbd8b8a"
    "703eb5664803f60e613557b986c11d9e"
    "e1f8981169d98e949b1e87e9ce5528df"
    "8ca1890dbfe6426841992d0fb054bb16"
)

_RCON = (0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1B, 0x36)


class AesMode(enum.IntFlag):
    """Operation selector for :func:`process`."""

    ENC = 0x00
    MIC = 0x01
    CTR = 0x04
    MICNOAUX = 0x08


def _check_len(name: str, value: bytes, size: int = BLOCK_SIZE) -> bytes:
    value = bytes(value)
    if len(value) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(value)}")
    return value


def _sub_word(word: int) -> int:
    return int.from_bytes(bytes(_SBOX[b] for b in word.to_bytes(4, "big")), "big")


def expand_key(key: bytes) -> list[int]:
    """Return the 44 round-key words (big-endian) for a 128-bit key."""
    key = _check_len("key", key)
    words = [int.from_bytes(key[i : i + 4], "big") for i in range(0, BLOCK_SIZE, 4)]
    for i in range(4, 4 * (_ROUNDS + 1)):
        temp = words[i - 1]
        if i % 4 == 0:
            rotated = ((temp << 8) & 0xFFFFFFFF) | (temp >> 24)
            temp = _sub_word(rotated) ^ (_RCON[i // 4 - 1] << 24)
        words.append(words[i - 4] ^ temp)
    return words


def _round_keys(words: Sequence[int]) -> list[bytes]:
    return [
        b"".join(w.to_bytes(4, "big") for w in words[r * 4 : r * 4 + 4])
        for r in range(_ROUNDS + 1)
    ]


def _xtime(b: int) -> int:
    b <<= 1
    return (b ^ 0x11B) if b & 0x100 else b


def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def _sub_shift(state: bytes) -> bytearray:
    # State is column-major: byte (row r, column c) sits at r + 4*c.
    return bytearray(
        _SBOX[state[r + 4 * ((c + r) % 4)]] for c in range(4) for r in range(4)
    )


def _mix_columns(state: bytearray) -> bytearray:
    out = bytearray()
    for c in range(0, BLOCK_SIZE, 4):
        a0, a1, a2, a3 = state[c : c + 4]
        out += bytes(
            (
                _xtime(a0) ^ _xtime(a1) ^ a1 ^ a2 ^ a3,
                a0 ^ _xtime(a1) ^ _xtime(a2) ^ a2 ^ a3,
                a0 ^ a1 ^ _xtime(a2) ^ _xtime(a3) ^ a3,
                _xtime(a0) ^ a0 ^ a1 ^ a2 ^ _xtime(a3),
            )
        )
    return out


def _encrypt(round_keys: Sequence[bytes], block: bytes) -> bytes:
    state = _xor(block, round_keys[0])
    for rk in round_keys[1:_ROUNDS]:
        state = _xor(_mix_columns(_sub_shift(state)), rk)
    return _xor(_sub_shift(state), round_keys[_ROUNDS])


def encrypt_block(key: bytes, block: bytes) -> bytes:
    """Encrypt one 16-byte block with AES-128."""
    block = _check_len("block", block)
    return _encrypt(_round_keys(expand_key(key)), block)


def _pad(chunk: bytes) -> bytes:
    if len(chunk) >= BLOCK_SIZE:
        return chunk[:BLOCK_SIZE]
    return chunk + b"\x80" + bytes(BLOCK_SIZE - len(chunk) - 1)


def _shift_left(block: bytes) -> bytes:
    value = int.from_bytes(block, "big")
    carry = value >> 127
    value = (value << 1) & ((1 << 128) - 1)
    if carry:
        value ^= 0x87
    return value.to_bytes(BLOCK_SIZE, "big")


def _chunks(data: bytes):
    for start in range(0, len(data), BLOCK_SIZE):
        yield data[start : start + BLOCK_SIZE]


def _ctr(round_keys: Sequence[bytes], counter: bytes, data: bytes) -> bytes:
    prefix = counter[:12]
    count = int.from_bytes(counter[12:], "big")
    out = bytearray()
    for chunk in _chunks(data):
        stream = _encrypt(round_keys, prefix + count.to_bytes(4, "big"))
        out += _xor(chunk, stream)
        count = (count + 1) & 0xFFFFFFFF
    return bytes(out)


def _mic(round_keys: Sequence[bytes], data: bytes, aux: bytes | None) -> bytes:
    iv = bytes(BLOCK_SIZE) if aux is None else _encrypt(round_keys, aux)
    remaining = data
    while remaining:
        if len(remaining) > BLOCK_SIZE:
            iv = _encrypt(round_keys, _xor(remaining[:BLOCK_SIZE], iv))
            remaining = remaining[BLOCK_SIZE:]
            continue
        subkey = _shift_left(_encrypt(round_keys, bytes(BLOCK_SIZE)))
        if len(remaining) < BLOCK_SIZE:
            subkey = _shift_left(subkey)
        iv = _encrypt(round_keys, _xor(_xor(_pad(remaining), iv), subkey))
        break
    return iv


def ctr_crypt(key: bytes, aux: bytes, data: bytes) -> bytes:
    """Encrypt or decrypt ``data`` in CTR mode starting from counter block ``aux``.

    The counter is the last 32-bit big-endian word of the block and wraps modulo 2**32.
    """
    aux = _check_len("aux", aux)
    return _ctr(_round_keys(expand_key(key)), aux, bytes(data))


def compute_mic(key: bytes, data: bytes, aux: bytes | None = None) -> int:
    """Return the 32-bit CMAC-based MIC of ``data``, prefixed by block ``aux`` if given."""
    if aux is not None:
        aux = _check_len("aux", aux)
    tag = _mic(_round_keys(expand_key(key)), bytes(data), aux)
    return int.from_bytes(tag[:4], "big")


def process(
    mode: AesMode, key: bytes, data: bytes, aux: bytes | None = None
) -> tuple[bytes, int]:
    """Run one AES operation and return ``(buffer, word)``.

    ``buffer`` is the processed data (unchanged for MIC, padded to whole blocks for
    plain block encryption) and ``word`` is the first 32-bit word of the final
    auxiliary block: the MIC in MIC mode.
    """
    mode = AesMode(mode)
    data = bytes(data)
    if aux is not None:
        aux = _check_len("aux", aux)
    rks = _round_keys(expand_key(key))

    if mode & AesMode.MICNOAUX:
        aux_block = bytes(BLOCK_SIZE)
    else:
        aux_block = aux if aux is not None else bytes(BLOCK_SIZE)
    first_word = int.from_bytes(aux_block[:4], "big")

    if mode & AesMode.MIC:
        prefix = None if mode & AesMode.MICNOAUX else aux_block
        tag = _mic(rks, data, prefix)
        return data, int.from_bytes(tag[:4], "big")
    if mode & AesMode.CTR:
        return _ctr(rks, aux_block, data), first_word
    out = b"".join(_encrypt(rks, _pad(chunk)) for chunk in _chunks(data))
    return out, first_word