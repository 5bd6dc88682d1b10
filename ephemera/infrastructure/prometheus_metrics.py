"""
Prometheus Metrics

prometheus_client implementation of the storage engine counters.
"""

import logging
import os
from typing import Optional, Tuple

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    generate_latest,
    multiprocess,
)

from ephemera.domain.file_storage.metrics import IFileMetrics

logger = logging.getLogger(__name__)

MULTIPROC_DIR_ENV = "PROMETHEUS_MULTIPROC_DIR"


class PrometheusFileMetrics(IFileMetrics):
    """
    Upload and expiry counters kept in their own registry.

    Each application instance gets a fresh registry, so several apps in one
    process never collide on metric names. When PROMETHEUS_MULTIPROC_DIR is
    set, render() aggregates the values written by every process sharing that
    directory, which includes the Celery worker running the sweep.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else CollectorRegistry()
        self.files_uploaded = Counter(
            "ephemera_files_uploaded",
            "The total number of files uploaded",
            registry=self.registry,
        )
        self.files_expired = Counter(
            "ephemera_files_expired",
            "The total number of files expired",
            registry=self.registry,
        )

    def inc_files_uploaded(self) -> None:
        self.files_uploaded.inc()

    def inc_files_expired(self) -> None:
        self.files_expired.inc()

    def render(self) -> Tuple[bytes, str]:
        """
        Serialize the counters in the Prometheus text format.

        Returns:
            Tuple of (body, content type)
        """
        if os.environ.get(MULTIPROC_DIR_ENV):
            registry = CollectorRegistry()
            multiprocess.MultiProcessCollector(registry)
        else:
            registry = self.registry
        return generate_latest(registry), CONTENT_TYPE_LATEST
