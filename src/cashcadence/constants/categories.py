"""
Centralized value sets for transaction kinds, income sources, expense
categories and recurrence frequencies.
"""

from __future__ import annotations

from enum import Enum


class TransactionKind(str, Enum):
    """Direction of money movement."""

    INCOME = "income"
    EXPENSE = "expense"


class IncomeSource(str, Enum):
    """Where an income came from."""

    MAIN_JOB = "mainJob"
    SIDE_JOB = "sideJob"
    OTHER = "other"


class ExpenseCategory(str, Enum):
    """Fixed expense taxonomy used by lists, charts and exports."""

    FOOD = "food"
    TRANSPORT = "transport"
    HOUSING = "housing"
    ENTERTAINMENT = "entertainment"
    HEALTHCARE = "healthcare"
    SHOPPING = "shopping"
    UTILITIES = "utilities"
    EDUCATION = "education"
    OTHER = "other"


class RecurringFrequency(str, Enum):
    """How often a recurring template fires."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


INCOME_SOURCES = [source.value for source in IncomeSource]
EXPENSE_CATEGORIES = [category.value for category in ExpenseCategory]
FREQUENCIES = [frequency.value for frequency in RecurringFrequency]

# Prefix of synthesised occurrence ids: recurring-<template id>-<YYYY-MM-DD>
RECURRING_ID_PREFIX = "recurring-"
