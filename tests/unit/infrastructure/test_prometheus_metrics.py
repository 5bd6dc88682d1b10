"""
Unit tests for the Prometheus storage counters.
"""

from unittest.mock import patch

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry

from ephemera.domain.file_storage.metrics import IFileMetrics
from ephemera.infrastructure.prometheus_metrics import PrometheusFileMetrics


class TestPrometheusFileMetrics:

    def test_is_a_file_metrics_backend(self):
        assert isinstance(PrometheusFileMetrics(), IFileMetrics)

    def test_counters_start_at_zero(self):
        metrics = PrometheusFileMetrics()

        assert metrics.registry.get_sample_value("ephemera_files_uploaded_total") == 0.0
        assert metrics.registry.get_sample_value("ephemera_files_expired_total") == 0.0

    def test_increments(self):
        metrics = PrometheusFileMetrics()

        metrics.inc_files_uploaded()
        metrics.inc_files_uploaded()
        metrics.inc_files_expired()

        assert metrics.registry.get_sample_value("ephemera_files_uploaded_total") == 2.0
        assert metrics.registry.get_sample_value("ephemera_files_expired_total") == 1.0

    def test_uses_given_registry(self):
        registry = CollectorRegistry()

        metrics = PrometheusFileMetrics(registry)
        metrics.inc_files_expired()

        assert registry.get_sample_value("ephemera_files_expired_total") == 1.0

    def test_instances_do_not_share_counters(self):
        first = PrometheusFileMetrics()
        second = PrometheusFileMetrics()

        first.inc_files_uploaded()

        assert second.registry.get_sample_value("ephemera_files_uploaded_total") == 0.0

    def test_render_text_format(self, monkeypatch):
        monkeypatch.delenv("PROMETHEUS_MULTIPROC_DIR", raising=False)
        metrics = PrometheusFileMetrics()
        metrics.inc_files_uploaded()

        body, content_type = metrics.render()

        assert content_type == CONTENT_TYPE_LATEST
        assert b"# HELP ephemera_files_uploaded_total The total number of files uploaded" in body
        assert b"ephemera_files_uploaded_total 1.0" in body

    def test_render_aggregates_shared_directory(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PROMETHEUS_MULTIPROC_DIR", str(tmp_path))
        metrics = PrometheusFileMetrics()

        with patch(
            "ephemera.infrastructure.prometheus_metrics.multiprocess.MultiProcessCollector"
        ) as mock_collector:
            metrics.render()

        mock_collector.assert_called_once()
        assert mock_collector.call_args.args[0] is not metrics.registry
