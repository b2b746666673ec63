"""
Context — Коллабораторы диагностики и трассировки

Ядро не держит глобального состояния: накопление текстовой трассы шагов и
журнала ошибок выполняется через явно передаваемый ArithmeticContext.

- DiagnosticSink: append-only журнал записей (source, message), последняя
  запись используется для сообщения пользователю
- TraceSink: append-only текстовое описание промежуточных шагов
- fallible: декоратор границы публичного API (ошибка → sentinel + запись)

Трасса носит исключительно косметический характер и никогда не
используется для управления потоком выполнения.
"""

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from src.core.domain.errors import ArithmeticFault, ErrorKind

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


# =============================================================================
# DIAGNOSTIC SINK
# =============================================================================


@dataclass(frozen=True)
class DiagnosticRecord:
    """Запись об ошибке операции."""

    source: str
    message: str
    kind: Optional[ErrorKind] = None

    def to_contract(self) -> Dict[str, Any]:
        """Сериализация в форму контракта diagnostic_record.json"""
        return {
            "source": self.source,
            "message": self.message,
            "kind": self.kind.value if self.kind is not None else None,
        }


class DiagnosticSink:
    """Журнал ошибок (append-only, очищаемый)."""

    def __init__(self) -> None:
        self._records: List[DiagnosticRecord] = []

    def record(self, source: str, message: str, kind: Optional[ErrorKind] = None) -> None:
        self._records.append(DiagnosticRecord(source=source, message=message, kind=kind))

    @property
    def records(self) -> Tuple[DiagnosticRecord, ...]:
        return tuple(self._records)

    def last(self) -> Optional[DiagnosticRecord]:
        """Последняя запись или None, если журнал пуст."""
        if not self._records:
            return None
        return self._records[-1]

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


# =============================================================================
# TRACE SINK
# =============================================================================


class TraceSink:
    """Накопитель текстовой трассы промежуточных шагов."""

    def __init__(self) -> None:
        self._fragments: List[str] = []

    def append(self, fragment: str) -> None:
        self._fragments.append(fragment)

    @property
    def fragments(self) -> Tuple[str, ...]:
        return tuple(self._fragments)

    @property
    def text(self) -> str:
        """Вся трасса одним блоком."""
        return "\n".join(self._fragments)

    def clear(self) -> None:
        self._fragments.clear()

    def __len__(self) -> int:
        return len(self._fragments)


# =============================================================================
# CONTEXT
# =============================================================================


@dataclass
class ArithmeticContext:
    """
    Контекст вызова: пара коллабораторов, принадлежащих вызывающей стороне.

    Один контекст можно передавать в последовательность операций, чтобы
    собрать общую трассу. Контекст не потокобезопасен: каждый поток
    использует собственный экземпляр.
    """

    diagnostics: DiagnosticSink = field(default_factory=DiagnosticSink)
    trace: TraceSink = field(default_factory=TraceSink)
    _depth: int = field(default=0, init=False, repr=False, compare=False)

    def narrate(self, text: str) -> None:
        self.trace.append(text)

    def warn(self, source: str, message: str) -> None:
        """Нефатальное предупреждение: попадает в трассу, не в журнал ошибок."""
        logger.warning("%s: %s", source, message)
        self.trace.append(f"Warning! {message}")


def fallible(source: str, failure: Any = None) -> Callable[[F], F]:
    """
    Декоратор границы публичного API.

    Обёрнутая функция получает keyword-only аргументы ctx и log.
    На самом внешнем уровне ArithmeticFault превращается в failure и
    (если log=True) в одну запись DiagnosticSink. Вложенные вызовы с тем
    же контекстом пробрасывают исключение дальше, чтобы многошаговый
    алгоритм прерывался целиком.

    Args:
        source: Имя операции для диагностической записи
        failure: Sentinel, возвращаемый при ошибке (None или False)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, ctx: Optional[ArithmeticContext] = None, log: bool = True, **kwargs: Any) -> Any:
            if ctx is None:
                ctx = ArithmeticContext()

            if ctx._depth > 0:
                try:
                    return func(*args, ctx=ctx, **kwargs)
                except ArithmeticFault as exc:
                    if exc.source is None:
                        exc.source = source
                    raise

            ctx._depth += 1
            try:
                return func(*args, ctx=ctx, **kwargs)
            except ArithmeticFault as exc:
                origin = exc.source or source
                logger.debug("%s failed (%s): %s", origin, exc.kind.value, exc.message)
                if log:
                    ctx.diagnostics.record(origin, exc.message, exc.kind)
                return failure
            finally:
                ctx._depth -= 1

        return wrapper  # type: ignore[return-value]

    return decorator
