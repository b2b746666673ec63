"""
CRC — Циклический избыточный код

Деление двоичных многочленов по модулю 2 (XOR), сообщение и порождающий
многочлен задаются строками из '0' и '1'.
"""

import logging

from src.core.domain.context import ArithmeticContext, fallible
from src.core.domain.errors import ArithmeticFault, ErrorKind

logger = logging.getLogger(__name__)


def require_binary(bits: str, name: str) -> str:
    """
    Проверка двоичной строки.

    Raises:
        ArithmeticFault: EMPTY_INPUT, INVALID_DIGIT
    """
    if not bits:
        raise ArithmeticFault(ErrorKind.EMPTY_INPUT, f"{name} is empty")
    for ch in bits:
        if ch not in "01":
            raise ArithmeticFault(ErrorKind.INVALID_DIGIT, f'{name} "{bits}" is not binary')
    return bits


def _normalize_generator(generator: str) -> str:
    require_binary(generator, "Generator")
    stripped = generator.lstrip("0")
    if not stripped:
        raise ArithmeticFault(ErrorKind.INVALID_GENERATOR, f'Invalid generator "{generator}"')
    return stripped


def _divide(bits: str, generator: str) -> str:
    """Остаток от деления по модулю 2 (без ведущих нулей, возможно пустой)."""
    remainder = bits.lstrip("0")
    span = len(generator)
    while len(remainder) >= span:
        window = "".join("0" if a == b else "1" for a, b in zip(remainder[:span], generator))
        remainder = (window + remainder[span:]).lstrip("0")
    return remainder


@fallible("crc_remainder")
def crc_remainder(bits: str, generator: str, *, ctx: ArithmeticContext) -> str:
    """
    Остаток CRC длиной deg(generator) разрядов.

    Ведущие нули порождающего многочлена отбрасываются.

    Raises:
        ArithmeticFault: EMPTY_INPUT, INVALID_DIGIT, INVALID_GENERATOR
    """
    require_binary(bits, "Message")
    generator = _normalize_generator(generator)
    remainder = _divide(bits, generator).rjust(len(generator) - 1, "0")
    ctx.narrate(f"{bits} % {generator} = {remainder or '0'}")
    return remainder


@fallible("encode_crc")
def encode_crc(message: str, generator: str, *, ctx: ArithmeticContext) -> str:
    """
    Кодирование сообщения: к сообщению дописывается остаток от деления
    message * x^deg на порождающий многочлен.

    Examples:
        >>> encode_crc("110101001110", "11001")
        '1101010011100111'
    """
    require_binary(message, "Message")
    generator = _normalize_generator(generator)
    padded = message + "0" * (len(generator) - 1)
    codeword = message + crc_remainder(padded, generator, ctx=ctx)
    ctx.narrate(f"Encoded message: {codeword}")
    return codeword


@fallible("decode_crc")
def decode_crc(codeword: str, generator: str, *, ctx: ArithmeticContext) -> bool:
    """
    Проверка принятого кодового слова.

    Returns:
        True при нулевом остатке, False иначе (None при некорректном вводе)
    """
    remainder = crc_remainder(codeword, generator, ctx=ctx)
    valid = "1" not in remainder
    if not valid:
        logger.debug("CRC check failed for %s: remainder %s", codeword, remainder)
    ctx.narrate("Message received correctly" if valid else "Message is corrupted")
    return valid
