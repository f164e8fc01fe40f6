from .expense import Expense
