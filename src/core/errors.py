"""
Errors — таксономия исключений temporal-ядра

Каждая ошибка библиотеки наследует TemporalError и тот builtin-класс, который
вызывающий код естественно перехватывает:

- ReceiverTypeError (TypeError): метод вызван на receiver, который не является
  экземпляром определяющего типа. Проверяется раньше любых аргументов.
- ArgumentTypeError (TypeError): обязательный аргумент отсутствует или имеет
  не тот фундаментальный вид.
- RangeValidationError (ValueError): значение корректного типа, но вне своего
  домена.

Ошибки не ретраятся и не подавляются внутри; неоднозначность и переполнение
разрешаются только явными policy-опциями.
"""

import functools
import sys
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])


# =============================================================================
# ИСКЛЮЧЕНИЯ
# =============================================================================


class TemporalError(Exception):
    """Базовый класс всех temporal-ошибок."""


class ReceiverTypeError(TemporalError, TypeError):
    """Метод вызван на receiver чужого типа."""


class ArgumentTypeError(TemporalError, TypeError):
    """Обязательный аргумент отсутствует или имеет неверный вид."""


class RangeValidationError(TemporalError, ValueError):
    """
    Значение вне своего домена.

    Examples:
        - exact time вне поддерживаемого диапазона instant
        - duration с несогласованными знаками
        - разные календари у операндов
        - rounding increment, не делящий максимум единицы
    """


# =============================================================================
# ПРОВЕРКА RECEIVER
# =============================================================================


def branded(function: F) -> F:
    """
    Отклоняет receiver, не являющийся экземпляром класса, где объявлена `function`.

    Работает для обычных методов и для getter'ов property (ставится под
    @property). Класс-владелец вычисляется лениво по qualified name функции,
    поэтому декоратор применим внутри тела охраняемого класса.

    Raises:
        ReceiverTypeError: Если receiver не является экземпляром владельца.
    """
    owner_path = function.__qualname__.split(".")[:-1]

    @functools.wraps(function)
    def checked(receiver: Any, *args: Any, **kwargs: Any) -> Any:
        owner: Any = sys.modules[function.__module__]
        for name in owner_path:
            owner = getattr(owner, name)
        if not isinstance(receiver, owner):
            raise ReceiverTypeError(
                f"{function.__qualname__} called on invalid receiver "
                f"{type(receiver).__name__}"
            )
        return function(receiver, *args, **kwargs)

    return checked  # type: ignore[return-value]
