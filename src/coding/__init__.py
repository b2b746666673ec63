"""
Error-detecting and error-correcting codes (CRC, Hamming SEC).
"""

from src.coding.crc import crc_remainder, decode_crc, encode_crc
from src.coding.hamming import (
    HAMMING_CODEWORD_LENGTH,
    HAMMING_MESSAGE_LENGTH,
    decode_hamming_sec,
    encode_hamming_sec,
    hamming_syndrome,
    parity_bit_count,
)

__all__ = [
    # CRC
    "encode_crc",
    "decode_crc",
    "crc_remainder",
    # Hamming SEC
    "HAMMING_MESSAGE_LENGTH",
    "HAMMING_CODEWORD_LENGTH",
    "encode_hamming_sec",
    "decode_hamming_sec",
    "hamming_syndrome",
    "parity_bit_count",
]
