"""Prometheus metrics for the attachment access-control layer.

Label values are bounded: failure reasons are error kinds, operations and
outcomes are fixed strings. User or tenant ids are never used as labels.
"""

from prometheus_client import Counter

auth_failures_total = Counter(
    "gazette_auth_failures_total",
    "Rejected authentication attempts",
    ["reason"]  # MissingCredential|MalformedCredential|InvalidOrExpiredCredential|...
)

auth_bypass_requests_total = Counter(
    "gazette_auth_bypass_requests_total",
    "Requests served through AUTH_BYPASS without authentication",
)

attachment_operations_total = Counter(
    "gazette_attachment_operations_total",
    "Attachment operations by outcome",
    ["operation", "outcome"]  # operation: download|delete|list, outcome: success|denied|not_found|invalid_state|error
)
