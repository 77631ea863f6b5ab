"""Global constants used across the application."""

from __future__ import annotations

import re

__all__ = [
    "PLATE_RE",
    "DOCUMENT_NUMBER_RE",
    "ACCEPTED_DOCUMENT_TYPE",
    "VALID_DOCUMENT_TYPES",
    "DEFAULT_VEHICLE_TYPE",
    "VEHICLE_TYPE_LOOKUP",
    "VEHICLE_TYPE_LABELS",
    "VEHICLE_TYPE_DESCRIPTIONS",
    "PICO_PLACA_HOURS",
    "PICO_PLACA_SCHEDULE",
    "WEEKDAY_NAMES",
    "SERVICE_CATEGORIES",
    "SERVICE_DESCRIPTION_MIN_LENGTH",
    "EXPENSIVE_SERVICE_COST",
    "RECENT_SERVICE_DAYS",
    "DEFAULT_SERVICE_TYPES",
    "PROFILE_NAME_MIN_LENGTH",
    "PHONE_RE",
    "EMAIL_RE",
]

# Colombian plate: three letters, two digits, one letter or digit (ABC123, ABC12D)
PLATE_RE = re.compile(r"[A-Z]{3}[0-9]{2}[0-9A-Z]", re.ASCII)

# Identity document numbers are 6 to 12 digits, leading zeros included
DOCUMENT_NUMBER_RE = re.compile(r"[0-9]{6,12}", re.ASCII)

# Cédula de Ciudadanía, the only document accepted as proof of ownership
ACCEPTED_DOCUMENT_TYPE = "CC"

VALID_DOCUMENT_TYPES: tuple[tuple[str, str], ...] = (
    ("CC", "Cédula de Ciudadanía"),
    ("CE", "Cédula de Extranjería"),
    ("PA", "Pasaporte"),
    ("TI", "Tarjeta de Identidad"),
)

DEFAULT_VEHICLE_TYPE = "car"

# Registry vehicle class label -> internal vehicle type identifier
VEHICLE_TYPE_LOOKUP: dict[str, str] = {
    "Automóvil": "car",
    "Motocicleta": "motorcycle",
    "Camioneta": "van",
    "Camión": "truck",
}

# Internal vehicle type identifier -> label stored in ``vehicle_types.name``
VEHICLE_TYPE_LABELS: dict[str, str] = {v: k for k, v in VEHICLE_TYPE_LOOKUP.items()}

VEHICLE_TYPE_DESCRIPTIONS: dict[str, str] = {
    "Automóvil": "Vehículo particular de pasajeros",
    "Motocicleta": "Vehículo de dos ruedas",
    "Camioneta": "Vehículo utilitario o van",
    "Camión": "Vehículo de carga",
}

PICO_PLACA_HOURS = "6:00 AM - 9:00 AM, 3:00 PM - 7:30 PM"

# Bogotá schedule keyed by ``date.weekday()`` (Monday == 0) -> restricted last digits
PICO_PLACA_SCHEDULE: dict[int, tuple[int, ...]] = {
    0: (0, 1),
    1: (2, 3),
    2: (4, 5),
    3: (6, 7),
    4: (8, 9),
    5: (),
    6: (),
}

WEEKDAY_NAMES: tuple[str, ...] = (
    "Lunes",
    "Martes",
    "Miércoles",
    "Jueves",
    "Viernes",
    "Sábado",
    "Domingo",
)

SERVICE_CATEGORIES: tuple[str, ...] = (
    "Mantenimiento Preventivo",
    "Mantenimiento Correctivo",
    "Reparación",
    "Inspección",
    "Limpieza",
    "Otros",
)

SERVICE_DESCRIPTION_MIN_LENGTH = 5

# Pesos (COP)
EXPENSIVE_SERVICE_COST = 500_000

RECENT_SERVICE_DAYS = 30

# (name, description, category, estimated hours, average cost COP)
DEFAULT_SERVICE_TYPES: tuple[tuple[str, str, str, float, int], ...] = (
    ("Cambio de aceite", "Cambio de aceite y filtros", "Mantenimiento Preventivo", 1.0, 180_000),
    ("Alineación y balanceo", "Alineación de dirección y balanceo de llantas", "Mantenimiento Preventivo", 1.5, 120_000),
    ("Revisión de frenos", "Inspección y ajuste del sistema de frenos", "Inspección", 1.0, 90_000),
    ("Cambio de batería", "Reemplazo de la batería del vehículo", "Mantenimiento Correctivo", 0.5, 450_000),
    ("Reparación de motor", "Diagnóstico y reparación de fallas de motor", "Reparación", 8.0, 1_500_000),
    ("Lavado completo", "Lavado exterior e interior del vehículo", "Limpieza", 2.0, 60_000),
)

PROFILE_NAME_MIN_LENGTH = 2

# Colombian mobile number, ten digits
PHONE_RE = re.compile(r"[0-9]{10}", re.ASCII)

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
