from attention_engine.telemetry.telemetry_logger import AttentionTelemetryLogger, CycleMetric

__all__ = ["AttentionTelemetryLogger", "CycleMetric"]
