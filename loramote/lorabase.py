"""LoRaWAN base definitions: radio parameter sets, frame layouts and MAC command codes."""

from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = [
    "CodingRate",
    "SpreadingFactor",
    "Bandwidth",
    "FrameType",
    "RadioParams",
    "get_sf",
    "set_sf",
    "get_bw",
    "set_bw",
    "get_cr",
    "set_cr",
    "get_nocrc",
    "set_nocrc",
    "get_ih",
    "set_ih",
    "make_rps",
    "same_sf_bw",
    "frame_type",
    "is_downlink",
]

_RPS_MASK = 0xFFFF


class CodingRate(enum.IntEnum):
    """LoRa forward error correction coding rate."""

    CR_4_5 = 0
    CR_4_6 = 1
    CR_4_7 = 2
    CR_4_8 = 3


class SpreadingFactor(enum.IntEnum):
    """Spreading factor; FSK selects the non-LoRa modem."""

    FSK = 0
    SF7 = 1
    SF8 = 2
    SF9 = 3
    SF10 = 4
    SF11 = 5
    SF12 = 6
    SFRFU = 7


class Bandwidth(enum.IntEnum):
    """Channel bandwidth."""

    BW125 = 0
    BW250 = 1
    BW500 = 2
    BWRFU = 3


class FrameType(enum.IntEnum):
    """Values of the frame type bit field in the MAC header."""

    JREQ = 0x00
    JACC = 0x20
    DAUP = 0x40
    DADN = 0x60
    DCUP = 0x80
    DCDN = 0xA0
    REJOIN = 0xC0
    PROP = 0xE0


ILLEGAL_RPS = 0xFF
DR_PAGE_EU868 = 0x00
DR_PAGE_US915 = 0x10

# Global frame limits and timing (seconds unless stated otherwise).
STD_PREAMBLE_LEN = 8
MAX_LEN_FRAME = 256
LEN_DEVNONCE = 2
LEN_ARTNONCE = 3
LEN_NETID = 3
DELAY_JACC1 = 5
DELAY_DNW1 = 1
DELAY_EXTDNW2 = 1
DELAY_JACC2 = DELAY_JACC1 + DELAY_EXTDNW2
DELAY_DNW2 = DELAY_DNW1 + DELAY_EXTDNW2
BCN_INTV_EXP = 7
BCN_INTV_SEC = 1 << BCN_INTV_EXP
BCN_INTV_MS = BCN_INTV_SEC * 1000
BCN_INTV_US = BCN_INTV_MS * 1000
BCN_RESERVE_MS = 2120
BCN_GUARD_MS = 3000
BCN_SLOT_SPAN_MS = 30
BCN_WINDOW_MS = BCN_INTV_MS - BCN_GUARD_MS - BCN_RESERVE_MS
BCN_RESERVE_US = 2120000
BCN_GUARD_US = 3000000
BCN_SLOT_SPAN_US = 30000

# Join request frame layout.
OFF_JR_HDR = 0
OFF_JR_ARTEUI = 1
OFF_JR_DEVEUI = 9
OFF_JR_DEVNONCE = 17
OFF_JR_MIC = 19
LEN_JR = 23

# Join accept frame layout.
OFF_JA_HDR = 0
OFF_JA_ARTNONCE = 1
OFF_JA_NETID = 4
OFF_JA_DEVADDR = 7
OFF_JA_RFU = 11
OFF_JA_DLSET = 11
OFF_JA_RXDLY = 12
OFF_CFLIST = 13
LEN_JA = 17
LEN_JAEXT = 17 + 16

# Data frame layout.
OFF_DAT_HDR = 0
OFF_DAT_ADDR = 1
OFF_DAT_FCT = 5
OFF_DAT_SEQNO = 6
OFF_DAT_OPTS = 8
MAX_LEN_PAYLOAD = MAX_LEN_FRAME - OFF_DAT_OPTS - 4

# Header octet bit fields.
HDR_FTYPE = 0xE0
HDR_RFU = 0x1C
HDR_MAJOR = 0x03
HDR_FTYPE_DNFLAG = 0x20
HDR_MAJOR_V1 = 0x00

# Frame control octet bit fields.
FCT_ADREN = 0x80
FCT_ADRARQ = 0x40
FCT_ACK = 0x20
FCT_MORE = 0x10
FCT_OPTLEN = 0x0F
FCT_CLASSB = FCT_MORE

NWKID_MASK = 0xFE000000
NWKID_BITS = 7

# MAC commands sent uplink.
MCMD_LCHK_REQ = 0x02
MCMD_LADR_ANS = 0x03
MCMD_DCAP_ANS = 0x04
MCMD_DN2P_ANS = 0x05
MCMD_DEVS_ANS = 0x06
MCMD_SNCH_ANS = 0x07
MCMD_PING_IND = 0x10
MCMD_PING_ANS = 0x11
MCMD_BCNI_REQ = 0x12

# MAC commands sent downlink.
MCMD_LCHK_ANS = 0x02
MCMD_LADR_REQ = 0x03
MCMD_DCAP_REQ = 0x04
MCMD_DN2P_SET = 0x05
MCMD_DEVS_REQ = 0x06
MCMD_SNCH_REQ = 0x07
MCMD_PING_SET = 0x11
MCMD_BCNI_ANS = 0x12

MCMD_BCNI_TUNIT = 30

MCMD_LADR_ANS_RFU = 0xF8
MCMD_LADR_ANS_POWACK = 0x04
MCMD_LADR_ANS_DRACK = 0x02
MCMD_LADR_ANS_CHACK = 0x01
MCMD_DN2P_ANS_RFU = 0xFC
MCMD_DN2P_ANS_DRACK = 0x02
MCMD_DN2P_ANS_CHACK = 0x01
MCMD_SNCH_ANS_RFU = 0xFC
MCMD_SNCH_ANS_DRACK = 0x02
MCMD_SNCH_ANS_FQACK = 0x01
MCMD_PING_ANS_RFU = 0xFE
MCMD_PING_ANS_FQACK = 0x01

MCMD_DEVS_EXT_POWER = 0x00
MCMD_DEVS_BATT_MIN = 0x01
MCMD_DEVS_BATT_MAX = 0xFE
MCMD_DEVS_BATT_NOINFO = 0xFF

MCMD_LADR_CHP_125ON = 0x60
MCMD_LADR_CHP_125OFF = 0x70
MCMD_LADR_N3RFU_MASK = 0x80
MCMD_LADR_CHPAGE_MASK = 0xF0
MCMD_LADR_REPEAT_MASK = 0x0F
MCMD_LADR_REPEAT_1 = 0x01
MCMD_LADR_CHPAGE_1 = 0x10
MCMD_LADR_DR_MASK = 0xF0
MCMD_LADR_POW_MASK = 0x0F
MCMD_LADR_DR_SHIFT = 4
MCMD_LADR_POW_SHIFT = 0

RSSI_OFF = 64
SNR_SCALEUP = 4


def get_sf(params: int) -> SpreadingFactor:
    """Spreading factor encoded in a radio parameter set."""
    return SpreadingFactor(params & 0x7)


def set_sf(params: int, sf: int) -> int:
    """Return ``params`` with its spreading factor replaced."""
    return ((params & ~0x7) | sf) & _RPS_MASK


def get_bw(params: int) -> Bandwidth:
    """Bandwidth encoded in a radio parameter set."""
    return Bandwidth((params >> 3) & 0x3)


def set_bw(params: int, bw: int) -> int:
    """Return ``params`` with its bandwidth replaced."""
    return ((params & ~0x18) | (bw << 3)) & _RPS_MASK


def get_cr(params: int) -> CodingRate:
    """Coding rate encoded in a radio parameter set."""
    return CodingRate((params >> 5) & 0x3)


def set_cr(params: int, cr: int) -> int:
    """Return ``params`` with its coding rate replaced."""
    return ((params & ~0x60) | (cr << 5)) & _RPS_MASK


def get_nocrc(params: int) -> bool:
    """True if the parameter set disables the payload CRC."""
    return bool((params >> 7) & 0x1)


def set_nocrc(params: int, nocrc: int) -> int:
    """Return ``params`` with its no-CRC flag replaced."""
    return ((params & ~0x80) | (int(nocrc) << 7)) & _RPS_MASK


def get_ih(params: int) -> int:
    """Implicit header length (0 means explicit header)."""
    return (params >> 8) & 0xFF


def set_ih(params: int, ih: int) -> int:
    """Return ``params`` with its implicit header length replaced."""
    return ((params & ~0xFF00) | (ih << 8)) & _RPS_MASK


def make_rps(sf: int, bw: int, cr: int, ih: int, nocrc: int) -> int:
    """Pack spreading factor, bandwidth, coding rate, header length and CRC flag."""
    value = sf | (bw << 3) | (cr << 5) | (0x80 if nocrc else 0) | ((ih & 0xFF) << 8)
    return value & _RPS_MASK


def same_sf_bw(r1: int, r2: int) -> bool:
    """True if two parameter sets share spreading factor and bandwidth (they interfere)."""
    return ((r1 ^ r2) & 0x1F) == 0


@dataclass(frozen=True)
class RadioParams:
    """Decoded radio parameter set."""

    sf: SpreadingFactor
    bw: Bandwidth
    cr: CodingRate
    ih: int = 0
    nocrc: bool = False

    @classmethod
    def from_int(cls, value: int) -> RadioParams:
        """Decode a packed 16-bit parameter set."""
        return cls(
            sf=get_sf(value),
            bw=get_bw(value),
            cr=get_cr(value),
            ih=get_ih(value),
            nocrc=get_nocrc(value),
        )

    def to_int(self) -> int:
        """Pack into the 16-bit parameter set representation."""
        return make_rps(self.sf, self.bw, self.cr, self.ih, self.nocrc)


def frame_type(header: int) -> FrameType:
    """Frame type held in a MAC header octet."""
    return FrameType(header & HDR_FTYPE)


def is_downlink(header: int) -> bool:
    """True if the MAC header marks a downlink frame (proprietary frames excluded)."""
    return frame_type(header) is not FrameType.PROP and bool(header & HDR_FTYPE_DNFLAG)