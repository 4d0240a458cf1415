"""
Expense Tracker
Интерактивный учёт расходов в реляционной БД
"""

__version__ = "1.0.0"
