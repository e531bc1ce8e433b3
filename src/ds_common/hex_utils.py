"""Hex helpers for field elements and raw report payloads on the HTTP edge.

Proof fields are 256-bit integers; clients send them either as JSON numbers
or as 0x-prefixed hex strings. Report payloads are 0x-prefixed hex.
"""

UINT256_MAX = 2**256 - 1


def parse_uint256(value: int | str) -> int:
    """Accept an int or a 0x-hex / decimal string; ValueError outside uint256."""
    if isinstance(value, bool):
        raise ValueError("boolean is not a field element")
    if isinstance(value, str):
        text = value.strip()
        number = int(text, 16) if text.lower().startswith("0x") else int(text, 10)
    else:
        number = int(value)
    if number < 0 or number > UINT256_MAX:
        raise ValueError(f"value out of uint256 range: {value}")
    return number


def parse_hex_bytes(value: str) -> bytes:
    """'0xdeadbeef' or 'deadbeef' -> bytes. ValueError on odd length or bad digits."""
    text = value[2:] if value[:2].lower() == "0x" else value
    return bytes.fromhex(text)


def to_hex(data: bytes) -> str:
    return "0x" + data.hex()
