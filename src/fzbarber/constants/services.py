"""
Catalog of the services offered at the shop.
Prices are whole Chilean pesos; the quick-add buttons are built from this list.
"""

from __future__ import annotations

from typing import NamedTuple


class ServiceType(NamedTuple):
    name: str
    price: int
    icon: str


SERVICE_CATALOG: list[ServiceType] = [
    ServiceType("Corte", 6500, "✂️"),
    ServiceType("Corte y perfilado", 7000, "✂️✨"),
    ServiceType("Corte y barba", 7500, "✂️🧔"),
    ServiceType("Corte barba y perfilado", 8000, "✂️🧔✨"),
    ServiceType("Barba", 3000, "🧔"),
]

# Lookup by display name
SERVICE_TYPES_BY_NAME = {service.name: service for service in SERVICE_CATALOG}
