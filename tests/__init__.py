"""
Тестовый набор zonedtime

Содержит:
- tests/unit/          : Unit тесты отдельных модулей
"""
