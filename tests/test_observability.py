"""Tests for observability module."""

from semantic_ingest.observability.metrics import (
    get_metrics,
    get_metrics_content_type,
    track_embedding_request,
    track_search_results,
    track_vectorstore_operation,
)


class TestMetricsFunctions:
    """Tests for metrics tracking functions."""

    def test_get_metrics_returns_bytes(self) -> None:
        """get_metrics returns bytes."""
        assert isinstance(get_metrics(), bytes)

    def test_content_type(self) -> None:
        """Content type is Prometheus text format."""
        assert "text/plain" in get_metrics_content_type()

    def test_track_embedding_request(self) -> None:
        """track_embedding_request records latency and batch size."""
        track_embedding_request(model="test-model", duration=0.2, batch_size=8)
        track_embedding_request(
            model="test-model", duration=0.1, batch_size=1, success=False
        )

        metrics = get_metrics().decode()
        assert "embedding_request_duration_seconds" in metrics
        assert "embedding_batch_size" in metrics
        assert 'status="error"' in metrics

    def test_track_vectorstore_operation(self) -> None:
        """track_vectorstore_operation records per-operation metrics."""
        track_vectorstore_operation("add", 0.05)

        metrics = get_metrics().decode()
        assert 'vectorstore_operations_total{operation="add",status="success"}' in metrics

    def test_track_search_results(self) -> None:
        """track_search_results records counts and top score."""
        track_search_results(results_returned=3, top_score=0.9)
        track_search_results(results_returned=0, top_score=0.0)

        metrics = get_metrics().decode()
        assert "search_results_returned" in metrics
        assert "search_top_score" in metrics
