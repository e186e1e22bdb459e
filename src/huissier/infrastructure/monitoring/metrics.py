"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Histogram

# ============================================================
# Authentication Metrics
# ============================================================

authentications_total = Counter(
    "huissier_authentications_total",
    "Authentication attempts by terminal state",
    ["outcome"],
)

authentication_duration_seconds = Histogram(
    "huissier_authentication_duration_seconds",
    "End-to-end authentication duration in seconds",
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

# ============================================================
# Provisioning Metrics
# ============================================================

provisioning_failures_total = Counter(
    "huissier_provisioning_failures_total",
    "Chat provisioning steps that failed (drift between ledger and chat)",
    ["step"],
)

channels_created_total = Counter(
    "huissier_channels_created_total",
    "Default channels created",
    ["name"],
)

# ============================================================
# Governance Ledger Metrics
# ============================================================

ledger_requests_total = Counter(
    "huissier_ledger_requests_total",
    "Total governance ledger RPC requests",
    ["method", "status"],
)

ledger_request_duration_seconds = Histogram(
    "huissier_ledger_request_duration_seconds",
    "Governance ledger RPC duration in seconds",
    ["method"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0),
)

# ============================================================
# Chat Backend Metrics
# ============================================================

chat_requests_total = Counter(
    "huissier_chat_requests_total",
    "Total chat backend requests",
    ["operation", "status"],
)

chat_request_duration_seconds = Histogram(
    "huissier_chat_request_duration_seconds",
    "Chat backend request duration in seconds",
    ["operation"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)
