"""Shared domain models for the Tranquil core."""
from .platform import (
    ClientDescriptor,
    DeviceClass,
    PlatformProfile,
    device_class_for,
)
from .risk import (
    RiskAnalysisSnapshot,
    Sentiment,
)

__all__ = [
    "ClientDescriptor",
    "DeviceClass",
    "PlatformProfile",
    "device_class_for",
    "RiskAnalysisSnapshot",
    "Sentiment",
]
