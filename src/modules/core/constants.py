"""Readiness constants.

Defines the states of the database readiness state machine and the
transitions allowed between them.
"""

from django.db import models


class ReadinessState(models.TextChoices):
    DISCONNECTED = "DISCONNECTED", "Disconnected"
    CONNECTING = "CONNECTING", "Connecting"
    READY = "READY", "Ready"
    FAILED = "FAILED", "Failed"


VALID_TRANSITIONS: dict[str, set[str]] = {
    ReadinessState.DISCONNECTED: {ReadinessState.CONNECTING},
    ReadinessState.CONNECTING: {ReadinessState.READY, ReadinessState.FAILED},
    ReadinessState.READY: {ReadinessState.CONNECTING},
    ReadinessState.FAILED: {ReadinessState.CONNECTING},
}

CONNECTION_ERROR_MESSAGE = "Error al conectar a la base de datos"
