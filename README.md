# loramote

Pure-Python helpers for LoRaWAN end devices and the LoRaMote sensor board.

## Modules

- `loramote.aes` – AES-128 key expansion (`expand_key`) and block encryption
  (`encrypt_block`), the CTR mode used for LoRaWAN payload encryption
  (`ctr_crypt`) and the AES-CMAC based message integrity code
  (`compute_mic`, which returns the first 32-bit word of the tag).
  `process` runs one operation selected by the `AesMode` flags
  (`ENC`, `MIC`, `CTR`, `MICNOAUX`) and returns `(buffer, word)`.
- `loramote.lorabase` – radio parameter sets (spreading factor, bandwidth,
  coding rate, implicit header length, no-CRC flag) packed into a 16-bit
  value, with `make_rps`, the `get_*`/`set_*` helpers, `same_sf_bw` and the
  frozen `RadioParams` dataclass (`from_int`, `to_int`). The enumerations
  `SpreadingFactor`, `Bandwidth`, `CodingRate` and `FrameType` are provided,
  along with `frame_type` and `is_downlink` for MAC header octets and
  constants for frame layouts and MAC command codes.
- `loramote.debugfmt` – integer formatting in bases 2 to 36 (`format_int`),
  hex output (`hex_byte`, `hex_uint`, `hex_dump`) and `DebugWriter`, which
  writes characters, hex values, dumps, decimals and labelled values to any
  text stream. `BANNER` holds the start-up banner text.
- `loramote.blipper` – decoding of LoRaMote sensor register data
  (`decode_temperature`, `decode_altitude`, `decode_acceleration`),
  fixed-width formatting (`format_temperature`, `format_acceleration`),
  request payloads for the SX1509 IO expander (`ioexp_init_payload`,
  `ioexp_write_payload`) and LED state handling (`led_is_on`, `apply_led`)
  with the `Led` and `LedMode` enumerations.

## Example

```python
import io

from loramote.aes import compute_mic
from loramote.lorabase import make_rps, get_sf, SpreadingFactor, Bandwidth, CodingRate
from loramote.debugfmt import DebugWriter, format_int, hex_dump
from loramote.blipper import format_temperature

key = bytes(16)
mic = compute_mic(key, b"payload", bytes(16))

rps = make_rps(SpreadingFactor.SF7, Bandwidth.BW125, CodingRate.CR_4_5, 0, False)
assert get_sf(rps) == SpreadingFactor.SF7

print(format_int(-42, 10, 6, " ", 10))   # "   -42"
print(hex_dump(b"\x01\xab"))             # "01 AB \r\n"
print(format_temperature(0x1980))        # "+25.5"

out = io.StringIO()
DebugWriter(out).val("mic=", mic)
```

## What it does not do

The package works on values and byte strings only. It does not talk to a
radio, an I2C bus, GPIO pins or a serial port: the `blipper` helpers build
payloads and interpret data that some other code has to send and read, and
`DebugWriter` writes to whatever stream it is given. There is no LoRaWAN MAC
state machine, join procedure, scheduler or command-line program.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```