# (c) Copyright Datacraft, 2026
"""Prometheus metrics for the scan pipeline."""
from prometheus_client import Counter, Histogram

SCANS_TOTAL = Counter(
	'sarah_scans_total',
	'Scan requests by outcome',
	['outcome'],
)

SCAN_DURATION = Histogram(
	'sarah_scan_duration_seconds',
	'Time spent resolving, configuring, acquiring and storing a scan',
)


def record_scan(outcome: str, seconds: float) -> None:
	"""Count a finished scan; outcome is 'success', 'client' or 'server'."""
	SCANS_TOTAL.labels(outcome=outcome).inc()
	SCAN_DURATION.observe(seconds)
