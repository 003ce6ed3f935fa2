from .connection import ConnectionConfig, CredentialSource, TLSSettings
from .metrics import METRIC_NAMES, Datapoint, MetricDefinition, ResourceKind, UsageEstimate

__all__ = [
    "ConnectionConfig",
    "CredentialSource",
    "Datapoint",
    "METRIC_NAMES",
    "MetricDefinition",
    "ResourceKind",
    "TLSSettings",
    "UsageEstimate",
]
