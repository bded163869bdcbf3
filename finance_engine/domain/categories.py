"""Spending category catalogue (key -> display label and colour)"""

from typing import NamedTuple


class CategoryInfo(NamedTuple):
    label: str
    color: str
    icon: str


DEFAULT_CATEGORY = "otros"
TRANSFER_CATEGORY = "transferencias"

CATEGORIES = {
    "hogar": CategoryInfo("Hogar", "#ef4444", "home"),
    "renta": CategoryInfo("Renta", "#ef4444", "home"),
    "comida": CategoryInfo("Comida", "#f97316", "restaurant"),
    "supermercado": CategoryInfo("Supermercado", "#84cc16", "shopping_cart"),
    "transporte": CategoryInfo("Transporte", "#eab308", "directions_car"),
    "compras": CategoryInfo("Compras", "#a855f7", "shopping_bag"),
    "servicios": CategoryInfo("Servicios", "#06b6d4", "bolt"),
    "suscripciones": CategoryInfo("Suscripciones", "#8b5cf6", "sync"),
    "salud": CategoryInfo("Salud", "#ec4899", "fitness_center"),
    "entretenimiento": CategoryInfo("Entretenimiento", "#f43f5e", "movie"),
    "educacion": CategoryInfo("Educación", "#14b8a6", "school"),
    "viajes": CategoryInfo("Viajes", "#0ea5e9", "flight"),
    "salario": CategoryInfo("Salario", "#10b981", "payments"),
    "comisiones_intereses": CategoryInfo("Comisiones/Intereses", "#dc2626", "warning"),
    TRANSFER_CATEGORY: CategoryInfo("Transferencias", "#6b7280", "swap_horiz"),
    "ingresos": CategoryInfo("Ingresos", "#10b981", "trending_up"),
    DEFAULT_CATEGORY: CategoryInfo("Otros", "#9ca3af", "more_horiz"),
}


def category_info(key: str) -> CategoryInfo:
    """Unknown keys render as "Otros" but keep their own key in results"""
    return CATEGORIES.get(key, CATEGORIES[DEFAULT_CATEGORY])
