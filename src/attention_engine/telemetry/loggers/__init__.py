from attention_engine.telemetry.loggers.session_logger import SessionLogger, get_session_logger

__all__ = ["SessionLogger", "get_session_logger"]
