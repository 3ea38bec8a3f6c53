"""Attention state decision rules."""

from attention_engine.classification.state_classifier import (
    AttentionLabel,
    AttentionState,
    classify_attention,
)

__all__ = ["AttentionLabel", "AttentionState", "classify_attention"]
