"""
Hamming SEC — Код Хэмминга с исправлением одиночной ошибки

Раскладка кодового слова (позиции 1..m+r):
- позиции, являющиеся степенями двойки, — контрольные разряды c1, c2, c4...
- остальные позиции по возрастанию занимают разряды сообщения m1..m8
- c_i — чётность всех позиций данных, в номере которых установлен бит i-1

Передаваемое слово: m8..m1 c4 c3 c2 c1 (сообщение, затем контрольные
разряды от старшего к младшему).
"""

import logging
from typing import Dict, Final, List

from src.coding.crc import require_binary
from src.core.domain.context import ArithmeticContext, fallible
from src.core.domain.errors import ArithmeticFault, ErrorKind

logger = logging.getLogger(__name__)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================
HAMMING_MESSAGE_LENGTH: Final[int] = 8
HAMMING_CODEWORD_LENGTH: Final[int] = 12


# =============================================================================
# РАСКЛАДКА
# =============================================================================


def parity_bit_count(message_length: int) -> int:
    """
    Число контрольных разрядов: наименьшее r, при котором 2^r > m + r.

    Examples:
        >>> parity_bit_count(8)
        4
    """
    count = 1
    while 2**count <= message_length + count:
        count += 1
    return count


def _data_positions(message_length: int) -> List[int]:
    """Позиции разрядов m1..m_n (по возрастанию)."""
    total = message_length + parity_bit_count(message_length)
    return [position for position in range(1, total + 1) if position & (position - 1)]


def _parity_bits(message: str, ctx: ArithmeticContext) -> List[int]:
    """Контрольные разряды c1..c_r для сообщения m_n..m1."""
    positions = _data_positions(len(message))
    data: Dict[int, int] = {
        position: int(bit) for position, bit in zip(positions, reversed(message))
    }
    parity: List[int] = []
    for i in range(parity_bit_count(len(message))):
        covered = [index for index, position in enumerate(positions, start=1) if position >> i & 1]
        value = sum(data[positions[index - 1]] for index in covered) % 2
        terms = " + ".join(f"m{index}" for index in covered)
        ctx.narrate(f"c{i + 1} = {terms} = {value}")
        parity.append(value)
    return parity


def _check_codeword(word: str) -> str:
    require_binary(word, "Codeword")
    if len(word) != HAMMING_CODEWORD_LENGTH:
        raise ArithmeticFault(
            ErrorKind.LENGTH_MISMATCH,
            f"Codeword must be {HAMMING_CODEWORD_LENGTH} bits long, got {len(word)}",
        )
    return word


# =============================================================================
# PUBLIC API
# =============================================================================


@fallible("encode_hamming_sec")
def encode_hamming_sec(message: str, *, ctx: ArithmeticContext) -> str:
    """
    Кодирование 8-разрядного сообщения кодом Хэмминга.

    Returns:
        12-разрядное слово m8..m1 c4 c3 c2 c1

    Raises:
        ArithmeticFault: EMPTY_INPUT, INVALID_DIGIT, LENGTH_MISMATCH

    Examples:
        >>> encode_hamming_sec("10111011")
        '101110111110'
    """
    require_binary(message, "Message")
    if len(message) != HAMMING_MESSAGE_LENGTH:
        raise ArithmeticFault(
            ErrorKind.LENGTH_MISMATCH,
            f"Message must be {HAMMING_MESSAGE_LENGTH} bits long, got {len(message)}",
        )
    parity = _parity_bits(message, ctx)
    codeword = message + "".join(str(bit) for bit in reversed(parity))
    ctx.narrate(f"Encoded message: {codeword}")
    return codeword


@fallible("hamming_syndrome")
def hamming_syndrome(word: str, *, ctx: ArithmeticContext) -> int:
    """
    Синдром ошибки: номер позиции искажённого разряда (0 — ошибки нет).

    Бит i синдрома установлен, если пересчитанный c_{i+1} не совпал с
    принятым.
    """
    _check_codeword(word)
    message = word[:HAMMING_MESSAGE_LENGTH]
    received = [int(bit) for bit in reversed(word[HAMMING_MESSAGE_LENGTH:])]
    computed = _parity_bits(message, ctx)
    syndrome = 0
    for i, (expected, actual) in enumerate(zip(computed, received)):
        if expected != actual:
            syndrome |= 1 << i
    ctx.narrate(f"Syndrome: {syndrome:0{len(received)}b}")
    return syndrome


@fallible("decode_hamming_sec")
def decode_hamming_sec(word: str, *, ctx: ArithmeticContext) -> str:
    """
    Декодирование 12-разрядного слова с исправлением одиночной ошибки.

    Returns:
        Исправленное 12-разрядное слово

    Raises:
        ArithmeticFault: EMPTY_INPUT, INVALID_DIGIT, LENGTH_MISMATCH

    Examples:
        >>> decode_hamming_sec("111010110100")
        '111010111100'
    """
    syndrome = hamming_syndrome(word, ctx=ctx)
    if syndrome == 0:
        ctx.narrate("No error")
        return word

    positions = _data_positions(HAMMING_MESSAGE_LENGTH)
    if syndrome in positions:
        data_index = positions.index(syndrome)
        index = HAMMING_MESSAGE_LENGTH - data_index - 1
        ctx.narrate(f"Error in data bit m{data_index + 1}")
    elif syndrome & (syndrome - 1) == 0:
        parity_index = syndrome.bit_length() - 1
        index = HAMMING_CODEWORD_LENGTH - parity_index - 1
        ctx.narrate(f"Error in parity bit c{parity_index + 1}")
    else:
        ctx.warn("decode_hamming_sec", f"Syndrome {syndrome} names no bit of {word}, left uncorrected")
        return word

    flipped = "1" if word[index] == "0" else "0"
    corrected = word[:index] + flipped + word[index + 1 :]
    logger.debug("Syndrome %d: corrected %s -> %s", syndrome, word, corrected)
    ctx.narrate(f"Corrected: {corrected}")
    return corrected
