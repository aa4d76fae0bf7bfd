"""Render-boundary gates — duplicate normalizers, framework patches, log suppression, raw template output."""

from safe_display.governance.duplicate_normalizer import DuplicateNormalizerAnalyzer
from safe_display.governance.log_suppression import LogSuppressionAnalyzer
from safe_display.governance.raw_output import RawOutputAnalyzer
from safe_display.governance.render_patch import RenderPatchAnalyzer

__all__ = [
    "DuplicateNormalizerAnalyzer",
    "LogSuppressionAnalyzer",
    "RawOutputAnalyzer",
    "RenderPatchAnalyzer",
]
