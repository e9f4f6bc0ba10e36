"""Closed value sets shared by extraction, validation and persistence."""

CONTRACT_CATEGORIES: tuple[str, ...] = ("Residencial", "Comercial", "Restaurante", "Loja")

EXPENSE_CATEGORIES: tuple[str, ...] = (
    "materiais",
    "mão-de-obra",
    "equipamentos",
    "transporte",
    "escritório",
    "software",
    "outros",
)

CONTRACT_STATUSES = frozenset({"active", "completed", "cancelled"})
EXPENSE_STATUSES = frozenset({"pending", "paid", "overdue", "cancelled"})
RECEIVABLE_STATUSES = frozenset({"pending", "received", "overdue"})
