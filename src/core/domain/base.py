"""
Temporal value base — поведение, общее для всех неизменяемых value-типов

- Значения никогда не приводятся к примитиву: value_of() и операторы порядка
  бросают TypeError; вызывающий код использует compare() / equals().
- Read-only поля доступны через дескрипторы `field`, отклоняющие receiver
  чужого типа, как и методы с @branded.
"""

from typing import Any, Callable, NoReturn, Optional

from src.core.errors import ReceiverTypeError


class TemporalValue:
    """База Duration, Instant, civil-значений и ZonedDateTime."""

    __slots__ = ()

    def value_of(self) -> NoReturn:
        raise TypeError(
            f"use compare() or equals() to compare {type(self).__name__}"
        )

    def __lt__(self, other: Any) -> NoReturn:
        self.value_of()

    def __le__(self, other: Any) -> NoReturn:
        self.value_of()

    def __gt__(self, other: Any) -> NoReturn:
        self.value_of()

    def __ge__(self, other: Any) -> NoReturn:
        self.value_of()


class field(property):
    """
    Read-only property, привязанное к классу, где оно объявлено.

    Вызов getter'а с receiver, не являющимся экземпляром этого класса
    (например, `PlainDate.year.fget(None)`), бросает ReceiverTypeError.
    """

    def __init__(self, getter: Callable[[Any], Any], doc: Optional[str] = None):
        self._owner: Optional[type] = None
        self._name = getattr(getter, "__name__", "field")

        def checked(receiver: Any) -> Any:
            if self._owner is None or not isinstance(receiver, self._owner):
                raise ReceiverTypeError(
                    f"{self._name} accessed on invalid receiver {type(receiver).__name__}"
                )
            return getter(receiver)

        super().__init__(checked, doc=doc or getter.__doc__)

    def __set_name__(self, owner: type, name: str) -> None:
        self._owner = owner
        self._name = f"{owner.__name__}.{name}"


def calendar_field(method: str, doc: Optional[str] = None) -> field:
    """Поле, вычисляемое календарём значения по его ISO дате."""
    return field(lambda receiver: getattr(receiver.calendar, method)(receiver), doc)


def time_field(name: str, doc: Optional[str] = None) -> field:
    """Wall-clock поле, читаемое из ISO времени значения."""
    return field(lambda receiver: getattr(receiver.iso_time, name), doc)
