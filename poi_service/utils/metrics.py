"""
Prometheus Metrics for the POI Service
Exposes metrics for upload processing, API performance, and store operations.
"""
from prometheus_client import Counter, Gauge, Histogram, Info, generate_latest, CONTENT_TYPE_LATEST

from poi_service import __version__


# =============================================================================
# Application Info
# =============================================================================
app_info = Info('poi_service', 'POI Service Information')
app_info.info({
    'version': __version__,
    'service': 'poi-service',
    'description': 'POI bulk ingestion and map queries'
})


# =============================================================================
# API Request Metrics
# =============================================================================
http_requests_total = Counter(
    'poi_service_http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'poi_service_http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0]
)

http_requests_in_progress = Gauge(
    'poi_service_http_requests_in_progress',
    'Number of HTTP requests currently being processed'
)


# =============================================================================
# Store Metrics
# =============================================================================
db_queries_total = Counter(
    'poi_service_db_queries_total',
    'Total store operations executed',
    ['operation']  # delete_all, insert_many, select_all, select_where_name_contains
)

db_query_duration_seconds = Histogram(
    'poi_service_db_query_duration_seconds',
    'Store operation duration in seconds',
    ['operation'],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0]
)

db_errors_total = Counter(
    'poi_service_db_errors_total',
    'Total store errors',
    ['operation', 'error_type']
)


# =============================================================================
# Ingestion Metrics
# =============================================================================
uploads_total = Counter(
    'poi_service_uploads_total',
    'Total upload attempts by outcome',
    ['outcome']  # success, partial, rejected, empty, failed, invalid_request
)

rows_rejected_total = Counter(
    'poi_service_rows_rejected_total',
    'Total upload rows rejected by validation'
)

insert_chunks_total = Counter(
    'poi_service_insert_chunks_total',
    'Total insert chunks issued to the store'
)

poi_collection_size = Gauge(
    'poi_service_poi_collection_size',
    'Number of POIs written by the last successful replace'
)


# =============================================================================
# Helper Functions
# =============================================================================
def get_metrics():
    """Generate metrics in Prometheus format"""
    return generate_latest()


def get_content_type():
    """Get the content type for Prometheus metrics"""
    return CONTENT_TYPE_LATEST


def record_http_request(method: str, endpoint: str, status_code: int, duration: float):
    """Record a finished HTTP request"""
    http_requests_total.labels(method=method, endpoint=endpoint, status_code=str(status_code)).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)


def record_db_query(operation: str, duration: float):
    """Record a store operation"""
    db_queries_total.labels(operation=operation).inc()
    db_query_duration_seconds.labels(operation=operation).observe(duration)


def record_db_error(operation: str, error_type: str):
    """Record a store error"""
    db_errors_total.labels(operation=operation, error_type=error_type).inc()


def record_upload(outcome: str, rejected_rows: int = 0):
    uploads_total.labels(outcome=outcome).inc()
    if rejected_rows:
        rows_rejected_total.inc(rejected_rows)


def record_insert_chunk():
    insert_chunks_total.inc()


def record_replace_completed(count: int):
    poi_collection_size.set(count)
