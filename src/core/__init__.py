"""
Core — value types, policies и числовые примитивы temporal-движка.

Пакет не обращается ни к базе time zone, ни к строковым форматам; они живут
в src.timezones и src.codec.
"""
