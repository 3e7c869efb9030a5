from unittest.mock import patch
from fastapi import FastAPI

from app.core.telemetry import setup_telemetry


class TestSetupTelemetry:
    """Test the setup_telemetry function."""

    @patch.dict("os.environ", {}, clear=True)
    @patch("app.core.telemetry.logger")
    def test_setup_telemetry_no_endpoint(self, mock_logger):
        """Telemetry stays disabled when no endpoint is configured."""
        app = FastAPI()

        assert setup_telemetry(app) is False

        mock_logger.warning.assert_called_once()
        assert "No endpoint configured" in str(mock_logger.warning.call_args)

    @patch.dict(
        "os.environ",
        {
            "OTEL_EXPORTER_OTLP_ENDPOINT": "http://localhost:4317",
            "OTEL_SERVICE_NAME": "test-service",
        },
    )
    @patch("app.core.telemetry.logger")
    @patch("app.core.telemetry.Resource")
    def test_resource_attributes(self, mock_resource, mock_logger):
        """The resource carries the service name and the configured environment."""
        mock_resource.create.side_effect = RuntimeError("stop after resource")

        setup_telemetry(FastAPI())

        attributes = mock_resource.create.call_args[0][0]
        assert attributes["service.name"] == "test-service"
        assert attributes["deployment.environment"] == "development"

    @patch.dict("os.environ", {"OTEL_EXPORTER_OTLP_ENDPOINT": "http://localhost:4317"})
    @patch("app.core.telemetry.logger")
    @patch("app.core.telemetry.Resource")
    def test_setup_failure_is_logged_not_raised(self, mock_resource, mock_logger):
        mock_resource.create.side_effect = RuntimeError("collector unreachable")

        assert setup_telemetry(FastAPI()) is False

        mock_logger.error.assert_called_once()
        assert "collector unreachable" in str(mock_logger.error.call_args)
